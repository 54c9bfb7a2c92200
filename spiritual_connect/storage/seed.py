"""
Sample content for development databases.

FLOW OVERVIEW
- seed_sample_data(storage, with_demo_user=False)
  • Inserts Hindu festivals, Diwali rituals and bhajans through the storage interface,
    so the same data lands in either backend.
  • Optionally adds a demo user with preferences and one verified contribution.
"""

import logging
from datetime import date

logger = logging.getLogger(__name__)

SAMPLE_FESTIVALS = [
    {
        'name': 'Diwali',
        'description': 'Diwali, the festival of lights, symbolizes the spiritual victory of light over '
                       'darkness, good over evil, and knowledge over ignorance.',
        'religion': 'Hinduism',
        'date': date(2026, 11, 8),
        'image_url': 'https://images.unsplash.com/photo-1518241353330-0f7941c2d9b5',
        'story': 'According to Hindu mythology, Diwali commemorates the return of Lord Rama, his wife Sita, '
                 'and brother Lakshmana to their kingdom Ayodhya after 14 years of exile and after defeating '
                 'the demon king Ravana.',
    },
    {
        'name': 'Govardhan Puja',
        'description': 'Govardhan Puja is a Hindu festival to worship Govardhan Hill and celebrate the victory '
                       'of Lord Krishna over Indra.',
        'religion': 'Hinduism',
        'date': date(2026, 11, 9),
        'image_url': 'https://images.unsplash.com/photo-1631265515161-7e561b874ee8',
        'story': 'According to Hindu scriptures, Lord Krishna protected the villagers of Vrindavan from a '
                 'devastating rainstorm sent by the rain god Indra by lifting the Govardhan Hill.',
    },
    {
        'name': 'Bhai Dooj',
        'description': 'Bhai Dooj is a festival celebrating the bond between brothers and sisters.',
        'religion': 'Hinduism',
        'date': date(2026, 11, 11),
        'image_url': 'https://images.unsplash.com/photo-1598303127949-c3c51f7b7826',
        'story': 'It is believed that Goddess Yamuna welcomed her brother Yama, the God of Death, with a '
                 'tilak ceremony and by preparing a feast for him.',
    },
    {
        'name': 'Navratri',
        'description': 'Nine nights dedicated to the worship of Goddess Durga',
        'religion': 'Hinduism',
        'date': date(2026, 10, 11),
        'image_url': 'https://example.com/navratri.jpg',
        'story': 'Navratri celebrates the victory of Goddess Durga over the demon Mahishasura',
    },
    {
        'name': 'Holi',
        'description': 'Festival of colors celebrating the arrival of spring',
        'religion': 'Hinduism',
        'date': date(2027, 3, 22),
        'image_url': 'https://example.com/holi.jpg',
        'story': 'Holi celebrates the divine love of Radha and Krishna, and the victory of good over evil',
    },
]

DIWALI_RITUALS = [
    {
        'title': 'Diwali Puja Vidhi',
        'description': 'Complete ritual procedure for Diwali Puja',
        'content': 'Detailed instructions for performing Diwali Puja at home',
        'materials': [
            'A small statue or picture of Goddess Lakshmi and Lord Ganesha',
            'A red cloth to place the deities',
            'Incense sticks (agarbatti) and holder',
            'Camphor (kapur) and holder',
            'Ghee lamp or oil lamp with cotton wicks',
            'Gangajal (holy water) or clean water',
            'Roli (kumkum), haldi (turmeric), chandan (sandalwood paste)',
            'Akshat (rice grains mixed with turmeric)',
            'Flowers and garlands',
            'Sweets and fruits for offering (prasad)',
            'Bell (ghanti)',
            'Conch shell (shankh)',
        ],
        'steps': [
            'Begin by cleaning the puja area and taking a bath. Place a red cloth on a raised platform '
            'and arrange the idols.',
            'Light the incense sticks and the lamp. Invoke Lord Ganesha first to remove all obstacles.',
            'Offer water, akshata, flowers, and garlands to the deities while chanting their names.',
            'Light the lamp with ghee or oil and offer it to the deities.',
            'Recite the mantras and prayers for Goddess Lakshmi and Lord Ganesha.',
            'Offer sweets and fruits as prasad.',
            'Perform aarti with the lamp.',
        ],
        'religion': 'Hinduism',
        'verified': True,
    },
    {
        'title': 'Diwali Home Decoration',
        'description': 'Traditional ways to decorate home for Diwali',
        'content': 'Guide for decorating your home for Diwali celebrations',
        'materials': ['Rangoli colors', 'Diyas', 'Candles', 'Flowers', 'Fairy lights'],
        'steps': [
            'Clean the entire house thoroughly',
            'Create rangoli designs at the entrance',
            'Place diyas around the house',
            'Hang lights and lanterns',
            'Decorate with flowers and torans',
        ],
        'religion': 'Hinduism',
        'verified': True,
    },
]

DIWALI_BHAJANS = [
    {
        'title': 'Lakshmi Aarti',
        'description': 'Traditional aarti for Goddess Lakshmi during Diwali celebrations',
        'youtube_url': 'https://www.youtube.com/watch?v=SampleLakshmiAarti',
        'type': 'Traditional',
        'religion': 'Hinduism',
        'duration': '5:28',
    },
    {
        'title': 'Om Jai Jagdish Hare',
        'description': 'Classical hymn dedicated to Lord Vishnu',
        'youtube_url': 'https://www.youtube.com/watch?v=TXLrJ4zCcbI',
        'type': 'Aarti',
        'religion': 'Hinduism',
        'duration': '5:30',
    },
    {
        'title': 'Jai Lakshmi Mata',
        'description': 'Devotional song dedicated to Goddess Lakshmi',
        'youtube_url': 'https://www.youtube.com/watch?v=OBl4RzX2d9I',
        'type': 'Bhajan',
        'religion': 'Hinduism',
        'duration': '4:45',
    },
]


def seed_sample_data(storage, with_demo_user=False):
    """Insert the sample catalogue into `storage` and return per-table counts."""
    festivals = [storage.create_festival(**dict(values)) for values in SAMPLE_FESTIVALS]
    diwali = festivals[0]

    rituals = [
        storage.create_ritual(festival_id=diwali.id, **dict(values))
        for values in DIWALI_RITUALS
    ]
    bhajans = [
        storage.create_bhajan(festival_id=diwali.id, **dict(values))
        for values in DIWALI_BHAJANS
    ]
    counts = {
        'festivals': len(festivals),
        'rituals': len(rituals),
        'bhajans': len(bhajans),
        'users': 0,
        'contributions': 0,
    }

    if with_demo_user:
        user = storage.create_user(
            username='testuser',
            email='test@example.com',
            google_id='123456789',
            first_name='Test',
            last_name='User',
        )
        storage.create_user_preferences(
            user.id,
            primary_religion='Hinduism',
            secondary_interests=['Buddhism', 'Jainism'],
            languages=['English', 'Hindi'],
            festival_reminder_days=3,
        )
        storage.create_contribution(
            user_id=user.id,
            title='Navratri Garba Dance Steps',
            description='Traditional Garba dance steps for Navratri celebrations',
            content='A detailed guide on performing Garba dance during Navratri festival',
            religion='Hinduism',
            festival='Navratri',
            status='verified',
            file_url='https://example.com/garba-guide.pdf',
        )
        counts['users'] = 1
        counts['contributions'] = 1

    logger.info(f"Seeded {storage.name} storage: {counts}")
    return counts
