# backend/utils/sample_data.py
import random
from typing import List

from sqlalchemy.orm import Session

from models.product import Product

_IMG = "https://images.unsplash.com/{}?auto=format&fit=crop&w=600&q=80"

# name, category, (min price, max price), featured, image, description
SAMPLE_PRODUCTS = [
    ("Red Onion (Nasik)", "Vegetables", (30, 80), True, "photo-1618512496248-a07fe83aa8cb",
     "Fresh, organic red onions sourced directly from Nasik farms. Perfect for salads and cooking."),
    ("Potato (Jyoti)", "Vegetables", (20, 45), False, "photo-1518977676601-b53f82aba655",
     "Premium quality Jyoti potatoes. Starchy and perfect for fries, curries, and baking."),
    ("Garlic (Desi)", "Vegetables", (120, 250), False, "photo-1615485290382-441e4d049cb5",
     "Strong flavored Desi Garlic. Essential for Indian cooking."),
    ("Ginger (Adrak)", "Vegetables", (80, 150), False, "photo-1615485500704-8e99099928b3",
     "Fresh, washed Ginger root. Adds zest and spice to tea and dishes."),
    ("Tomato (Hybrid)", "Vegetables", (25, 60), True, "photo-1592924357228-91a4daadcfea",
     "Juicy, red hybrid tomatoes. Great for curries, sauces, and salads."),
    ("Tamarind (Imli)", "Exotic", (150, 300), False, "photo-1606923829579-560223742fbc",
     "Tangy and sweet natural Tamarind pods. Used in chutneys and sambar."),
    ("Dry Red Chili (Teja)", "Spices", (200, 400), False, "photo-1596560548464-f010549b84d7",
     "Spicy Guntur Teja dry red chilies. Adds high heat to your dishes."),
    ("Kashmiri Red Chili", "Spices", (300, 500), True, "photo-1621996346565-e3dbc646d9a9",
     "Vibrant red Kashmiri chilies. Known for great color and mild heat."),
    ("Green Chili (Spicy)", "Vegetables", (60, 100), False, "photo-1563911892437-1e59bd4e4111",
     "Fresh spicy green chilies. A staple for every Indian kitchen."),
    ("Carrot (Ooty)", "Vegetables", (40, 90), False, "photo-1598170845058-32b9d6a5da37",
     "Sweet and crunchy Ooty carrots. Rich in Vitamin A."),
]


def slugify(name: str) -> str:
    return "-".join((name or "").lower().split())


def seed_sample_products(db: Session, rng: random.Random = None) -> List[Product]:
    """Insert the sample catalog with random prices and stock levels."""
    rng = rng or random.Random()
    created = []
    for name, category, (low, high), featured, image, description in SAMPLE_PRODUCTS:
        product = Product(
            name=name,
            slug=slugify(name),
            category=category,
            price_per_kg=rng.randint(low, high),
            unit="kg",
            description=description,
            images=[_IMG.format(image)],
            featured=featured,
            in_stock=True,
            stock_quantity=rng.randint(0, 99),
            low_stock_threshold=20,
        )
        db.add(product)
        created.append(product)
    db.commit()
    return created
