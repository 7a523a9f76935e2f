import logging
from datetime import datetime, timezone
from decimal import Decimal

from storefront.db.storage import Storage
from storefront.models import CategoryCreate, ProductCreate

logger = logging.getLogger(__name__)

UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&w=1470&q=80"

CATEGORIES = [
    ("Electronics", "laptop"),
    ("Clothing", "tshirt"),
    ("Home & Kitchen", "home"),
    ("Beauty", "spa"),
    ("Sports", "running"),
]

# name, description, price, old price, image, category id, rating, reviews,
# (new, featured, popular, sale), created
PRODUCTS = [
    ("Wireless Headphones", "Premium sound quality with noise cancellation",
     "129.99", "159.99", UNSPLASH.format("photo-1505740420928-5e560c06d30e"), 1, "4.5", 128,
     (True, True, False, False), "2023-03-01"),
    ("Smart Watch Series 5", "Fitness tracking with heart rate monitor",
     "89.99", "119.99", UNSPLASH.format("photo-1523275335684-37898b6baf30"), 1, "4.0", 96,
     (False, True, False, True), "2023-02-15"),
    ("Slim Fit Dress Shirt", "100% cotton, wrinkle-resistant fabric",
     "49.99", None, UNSPLASH.format("photo-1594035910387-fea47794261f"), 2, "4.9", 215,
     (False, True, False, False), "2023-01-20"),
    ("Urban Runner Sneakers", "Lightweight with cushioned insole",
     "79.99", "99.99", UNSPLASH.format("photo-1525904097878-94fb15835963"), 2, "4.2", 175,
     (False, True, True, False), "2023-02-01"),
    ("Designer Sunglasses", "UV protection with stylish frame",
     "59.99", None, UNSPLASH.format("photo-1572635196237-14b3f281503f"), 2, "4.0", 88,
     (True, False, False, False), "2023-03-10"),
    ("Outdoor Adventure Backpack", "Durable, water-resistant design",
     "79.99", None, UNSPLASH.format("photo-1560343090-f0409e92791a"), 5, "4.4", 112,
     (True, False, False, False), "2023-03-05"),
    ("Smart Coffee Maker", "Programmable with app control",
     "129.99", None, UNSPLASH.format("photo-1631729371254-42c2892f0e6e"), 3, "4.7", 143,
     (True, False, False, False), "2023-03-15"),
    ("Performance Running Shoes", "Lightweight with responsive cushioning",
     "119.99", None, UNSPLASH.format("photo-1542291026-7eec264c27ff"), 5, "4.8", 201,
     (True, False, False, False), "2023-03-20"),
    ("Premium Smartwatch", "Health tracking with AMOLED display",
     "199.99", None, UNSPLASH.format("photo-1546868871-7041f2a55e12"), 1, "4.9", 188,
     (True, False, False, False), "2023-03-25"),
    ("Luxury Skincare Set", "Organic ingredients, vegan-friendly",
     "89.99", None, UNSPLASH.format("photo-1618354691373-d851c5c3a990"), 4, "4.6", 156,
     (True, False, False, False), "2023-03-18"),
    ("Aromatherapy Candle Set", "Natural soy wax with essential oils",
     "39.99", None, UNSPLASH.format("photo-1600086827875-a63b01f1335c"), 3, "4.3", 124,
     (True, False, False, False), "2023-03-22"),
    ("Waterproof Bluetooth Speaker", "24-hour battery with deep bass",
     "69.99", None, UNSPLASH.format("photo-1585155770447-2f66e2a397b5"), 1, "4.5", 134,
     (True, False, False, False), "2023-03-28"),
    ("Pro Football Cleats", "High traction, lightweight cleats for optimal performance on the field",
     "89.99", "119.99", "https://m.media-amazon.com/images/I/71Z8tlCrM6L._AC_SL1500_.jpg", 5, "4.7", 156,
     (True, True, False, True), "2023-03-29"),
    ("Team Football Jersey", "Official team jersey with moisture-wicking technology",
     "69.99", None, "https://printfactory.com.ng/wp-content/uploads/2018/12/original-club-jersey-print-printfactory-ng.png",
     5, "4.5", 128, (True, False, True, False), "2023-03-30"),
    ("Athletic Performance Socks", "Cushioned, anti-blister socks for all sports",
     "14.99", "19.99", UNSPLASH.format("photo-1586350977771-b3b0abd50c82"), 5, "4.3", 98,
     (False, False, False, True), "2023-03-15"),
    ("Premium Knife Set", "Professional grade stainless steel knife set with wooden block",
     "129.99", "159.99", UNSPLASH.format("photo-1593618998160-e34014e67546"), 3, "4.8", 187,
     (True, True, False, True), "2023-03-25"),
    ("Silicone Cooking Utensil Set", "Heat-resistant, non-stick silicone utensils for everyday cooking",
     "34.99", None, UNSPLASH.format("photo-1639544799091-1c1aeeff5553"), 3, "4.6", 134,
     (False, False, True, False), "2023-02-20"),
    ("Digital Kitchen Scale", "Precise measurements for all your cooking and baking needs",
     "19.99", "24.99", UNSPLASH.format("photo-1558705438-2908eda7d172"), 3, "4.4", 112,
     (False, False, False, True), "2023-01-15"),
    ("Essential Cotton T-Shirt", "Soft, breathable 100% cotton t-shirt in a variety of colors",
     "19.99", None, UNSPLASH.format("photo-1521572163474-6864f9cf17ab"), 2, "4.4", 245,
     (False, False, True, False), "2023-02-10"),
    ("Comfort Fit Joggers", "Casual, tapered joggers with elastic waistband and pockets",
     "39.99", "49.99", UNSPLASH.format("photo-1515110371136-7e393289662c"), 2, "4.7", 178,
     (True, True, False, True), "2023-03-05"),
]


def catalog_products():
    for name, description, price, old_price, image_url, category_id, rating, reviews, flags, created in PRODUCTS:
        is_new, is_featured, is_popular, is_sale = flags
        yield ProductCreate(
            name=name,
            description=description,
            price=Decimal(price),
            old_price=Decimal(old_price) if old_price else None,
            image_url=image_url,
            category_id=category_id,
            rating=Decimal(rating),
            reviews=reviews,
            in_stock=True,
            is_new=is_new,
            is_featured=is_featured,
            is_popular=is_popular,
            is_sale=is_sale,
            created_at=datetime.fromisoformat(created).replace(tzinfo=timezone.utc),
        )


def seed_catalog(storage: Storage) -> bool:
    """Load the starter catalog. Returns False when categories already exist."""
    existing = storage.list_categories()
    if existing:
        logger.info("Catalog already contains %d categories. Skipping seed.", len(existing))
        return False

    for name, icon in CATEGORIES:
        storage.create_category(CategoryCreate(name=name, icon=icon))
    for product in catalog_products():
        storage.create_product(product)

    logger.info("Seeded %d categories and %d products", len(CATEGORIES), len(PRODUCTS))
    return True
