from storefront.core.config import settings
from storefront.db.database import DatabaseStorage
from storefront.db.seed import CATEGORIES, PRODUCTS, seed_catalog
from storefront.db.session import make_engine


def seed_products():
    print(f"Creating database and tables at {settings.DATABASE_URL}...")
    storage = DatabaseStorage(make_engine(settings.DATABASE_URL))

    if not seed_catalog(storage):
        print(f"Database already contains {storage.count_products()} products. Skipping seed.")
        return

    print(f"Successfully seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products!")


if __name__ == "__main__":
    seed_products()
