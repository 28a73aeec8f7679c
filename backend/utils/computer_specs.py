# backend/utils/computer_specs.py
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from models.category import Category
from models.laptop import LaptopCondition

logger = logging.getLogger(__name__)

# Fixed ids of the predefined computer categories
LAPTOP_CATEGORY_ID = "laptop-category"
DESKTOP_CATEGORY_ID = "desktop-category"

PREDEFINED_CATEGORIES = [
    (LAPTOP_CATEGORY_ID, "Laptop"),
    (DESKTOP_CATEGORY_ID, "Desktop"),
]

# Suggestions offered by the laptop form (free text is still accepted)
LAPTOP_BRANDS = [
    "Acer", "Apple", "ASUS", "Dell", "Fujitsu", "Gigabyte", "HP", "Huawei",
    "Lenovo", "LG", "Microsoft", "MSI", "Razer", "Samsung", "Sony", "Toshiba", "Xiaomi",
]

PROCESSORS = [
    "Intel Core i3", "Intel Core i5", "Intel Core i7", "Intel Core i9",
    "Intel Celeron", "Intel Pentium",
    "AMD Ryzen 3", "AMD Ryzen 5", "AMD Ryzen 7", "AMD Ryzen 9",
    "Apple M1", "Apple M2", "Apple M3",
]

GRAPHICS = [
    "Intel HD Graphics", "Intel UHD Graphics", "Intel Iris Xe", "AMD Radeon Graphics",
    "NVIDIA GeForce MX450", "NVIDIA GeForce GTX 1650", "NVIDIA GeForce GTX 1660 Ti",
    "NVIDIA GeForce RTX 3050", "NVIDIA GeForce RTX 3060", "NVIDIA GeForce RTX 3070",
    "NVIDIA GeForce RTX 3080", "NVIDIA GeForce RTX 4050", "NVIDIA GeForce RTX 4060",
    "NVIDIA GeForce RTX 4070", "NVIDIA GeForce RTX 4080", "NVIDIA GeForce RTX 4090",
    "AMD Radeon RX 6600M", "AMD Radeon RX 6700M", "AMD Radeon RX 6800M",
    "Apple integrated GPU",
]

RAM = ["4 GB", "8 GB", "16 GB", "32 GB", "64 GB"]

STORAGE = [
    "128 GB SSD", "256 GB SSD", "512 GB SSD", "1 TB SSD", "2 TB SSD",
    "500 GB HDD", "1 TB HDD", "2 TB HDD",
    "128 GB SSD + 1 TB HDD", "256 GB SSD + 1 TB HDD", "512 GB SSD + 1 TB HDD",
]

DISPLAYS = [
    f"{size} inch {res}"
    for size, resolutions in (
        ("13.3", ("HD", "FHD", "QHD")),
        ("14", ("HD", "FHD", "QHD")),
        ("15.6", ("HD", "FHD", "QHD", "4K")),
        ("16", ("FHD", "QHD", "4K")),
        ("17.3", ("FHD", "QHD", "4K")),
    )
    for res in resolutions
]

CONDITIONS = [c.value for c in LaptopCondition]


def laptop_options() -> dict:
    return {
        "brands": LAPTOP_BRANDS,
        "processors": PROCESSORS,
        "graphics": GRAPHICS,
        "ram": RAM,
        "storage": STORAGE,
        "displays": DISPLAYS,
        "conditions": CONDITIONS,
    }


def ensure_computer_categories(db: Session) -> int:
    """Creates the predefined computer categories when missing (matched by id or name)."""
    created = 0
    for cat_id, name in PREDEFINED_CATEGORIES:
        exists = db.query(Category).filter(or_(Category.id == cat_id, Category.name == name)).first()
        if exists:
            continue
        db.add(Category(id=cat_id, name=name))
        created += 1
    if created:
        db.commit()
        logger.info(f"Created {created} predefined computer categories")
    return created


def laptop_category_id(db: Session) -> str:
    """Id of the predefined laptop category, created on demand."""
    ensure_computer_categories(db)
    category = (
        db.query(Category)
        .filter(or_(Category.id == LAPTOP_CATEGORY_ID, Category.name == PREDEFINED_CATEGORIES[0][1]))
        .order_by((Category.id == LAPTOP_CATEGORY_ID).desc())
        .first()
    )
    return category.id
