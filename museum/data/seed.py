# museum/data/seed.py
from sqlalchemy import select

from museum.data.database import Base, SessionLocal, engine
from museum.data.models import AboutContentModel, ProductModel
from museum.services.about_service import AboutService
from museum.services.catalog_service import CatalogService
from museum.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {
        "name": "Brocade Banarasi Wall Panel",
        "summary": "Opulent gold-and-indigo Banarasi brocade woven circa 1910 in Varanasi workshops.",
        "description": (
            "<p>This antique panel is handwoven using real zari and mulberry silk. It was curated "
            "from a private collection in Varanasi and restored by Vyom Heritage conservators.</p>"
            "<ul><li>Material: Silk & zari threads</li><li>Dimensions: 94cm &times; 62cm</li>"
            "<li>Includes archival provenance dossier</li></ul>"
        ),
        "price": 18500,
        "compare_at_price": 21500,
        "inventory_count": 3,
        "is_featured": True,
        "images": [
            "https://images.unsplash.com/photo-1526498460520-4c246339dccb?auto=format&fit=crop&w=900&q=80",
            "https://images.unsplash.com/photo-1582719478250-c89cae4dc85b?auto=format&fit=crop&w=900&q=80",
        ],
    },
    {
        "name": "Kutch Mirrorwork Textile Scroll",
        "summary": "Hand-embroidered mirrorwork textile featuring tribal motifs from Kutch, Gujarat.",
        "description": (
            "<p>Each mirrored motif is hand-appliqued by Rabari artisans. The scroll is mounted on "
            "cotton backing for preservation.</p>"
        ),
        "price": 14200,
        "compare_at_price": None,
        "inventory_count": 5,
        "is_featured": False,
        "images": [
            "https://images.unsplash.com/photo-1503387762-592deb58ef4e?auto=format&fit=crop&w=900&q=80",
        ],
    },
    {
        "name": "Indigo Ajrakh Shawl",
        "summary": "Natural indigo Ajrakh shawl block-printed with hand-carved wooden blocks.",
        "description": (
            "<p>Crafted in Bhuj using slow multi-stage dyeing with indigo, madder and iron. "
            "The shawl arrives in a museum archival box.</p>"
        ),
        "price": 9800,
        "compare_at_price": 11200,
        "inventory_count": 8,
        "is_featured": True,
        "images": [
            "https://images.unsplash.com/photo-1542293787938-4d2226c12e79?auto=format&fit=crop&w=900&q=80",
        ],
    },
    {
        "name": "Handwoven Silk Sari (Ajrakh Palette)",
        "summary": "Bhuj-inspired silk sari featuring indigo and madder Ajrakh motifs on handloom silk.",
        "description": (
            "<p>Limited-edition silk sari co-created with Ajrakh artisans, hand block printed "
            "with natural dyes and presented in archival packaging.</p>"
        ),
        "price": 19800,
        "compare_at_price": 22800,
        "inventory_count": 6,
        "is_featured": False,
        "images": [
            "https://images.unsplash.com/photo-1514996937319-344454492b37?auto=format&fit=crop&w=900&q=80",
        ],
    },
    {
        "name": "Pichwai Lotus Painting",
        "summary": "Miniature Pichwai painting on cotton depicting lotus ponds for Shrinathji.",
        "description": (
            "<p>Painted in Nathdwara temple ateliers with natural pigments. Mounted on archival "
            "board and framed under UV glass.</p>"
        ),
        "price": 26500,
        "compare_at_price": 29800,
        "inventory_count": 2,
        "is_featured": True,
        "images": [
            "https://images.unsplash.com/photo-1526498460520-4c246339dccb?auto=format&fit=crop&w=900&q=80",
            "https://images.unsplash.com/photo-1495435229349-e86db7bfa013?auto=format&fit=crop&w=900&q=80",
        ],
    },
    {
        "name": "Art Deco Silver Kada Pair",
        "summary": "Sterling silver bangles with Art Deco enamel work, restored by Vyom jewellers.",
        "description": (
            "<p>1930s era sterling bangles sourced from a Mumbai estate. Ships with velvet "
            "archival pouch.</p>"
        ),
        "price": 15800,
        "compare_at_price": None,
        "inventory_count": 4,
        "is_featured": False,
        "images": [
            "https://images.unsplash.com/photo-1522312346375-d1a52e2b99b3?auto=format&fit=crop&w=900&q=80",
        ],
    },
]

ABOUT = {
    "title": "Vyom Heritage Museum",
    "paragraph_one": (
        "Vyom Heritage Museum is a living archive celebrating India's textile legacies. Our curators "
        "travel across craft clusters, collecting heirloom pieces, oral histories, and techniques."
    ),
    "paragraph_two": (
        "The museum is nested within a restored haveli in Ahmedabad and houses rotating exhibits of "
        "brocade, resist-dyed textiles, and our conservatory lab."
    ),
    "paragraph_three": (
        "We collaborate with master artisans, conservation scientists, and design schools to keep "
        "the handloom economy vibrant."
    ),
    "image_url": "https://images.unsplash.com/photo-1495435229349-e86db7bfa013?auto=format&fit=crop&w=1600&q=80",
}


def seed_catalog(db) -> int:
    # not forcing: only seed if empty
    if db.execute(select(ProductModel.id)).first():
        return 0

    catalog = CatalogService(db)
    for index, item in enumerate(PRODUCTS, start=1):
        data = {k: v for k, v in item.items() if k != "images"}
        data["sku"] = f"VY-{index:03d}"
        catalog.create_product(data, image_urls=item["images"])
    return len(PRODUCTS)


def seed_about(db) -> bool:
    if db.execute(select(AboutContentModel.id)).first():
        return False
    AboutService(db).publish(**ABOUT)
    return True


def seed():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        products = seed_catalog(db)
        about = seed_about(db)
        db.commit()
        logger.info(f"Seed finished: {products} products, about content {'added' if about else 'kept'}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
