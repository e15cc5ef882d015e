"""Static category tree: top-level categories and their sections."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    slug: str
    name: str
    description: str
    image: str


@dataclass(frozen=True)
class Category:
    slug: str
    name: str
    description: str
    sections: tuple[Section, ...]

    def section(self, slug: str) -> Section | None:
        return next((section for section in self.sections if section.slug == slug), None)


def _section(slug, name, description, image):
    return Section(slug=slug, name=name, description=description, image=f"/categories/{image}")


CATEGORY_TREE: tuple[Category, ...] = (
    Category(
        slug="african-foodstuff",
        name="African Foodstuff",
        description="Authentic African ingredients and staples",
        sections=(
            _section("rice-grains", "Rice & Grains", "Premium rice, beans, and grains", "rice-grains.jpg"),
            _section("spices", "Spices & Seasonings", "Traditional African spices", "spices.jpg"),
            _section("oil", "Oil & Palm Oil", "Cooking oils and palm products", "oil.jpg"),
            _section("tubers", "Tubers & Roots", "Yam, cassava, and more", "tubers.jpg"),
            _section("meats-fish", "Meats & Fish", "Fresh and smoked proteins", "meats.jpg"),
            _section("soups-sauces", "Soups & Sauces", "Traditional soup ingredients", "soups.jpg"),
        ),
    ),
    Category(
        slug="packaged-foods",
        name="Packaged Foods",
        description="Ready-to-eat and convenience foods",
        sections=(
            _section("snacks", "Snacks & Treats", "Chips, cookies, and more", "snacks.jpg"),
            _section("drinks", "Beverages", "Soft drinks and juices", "drinks.jpg"),
            _section("ready-meals", "Ready Meals", "Quick and easy meals", "ready-meals.jpg"),
            _section("cereals", "Cereals & Breakfast", "Start your day right", "cereals.jpg"),
        ),
    ),
    Category(
        slug="wigs",
        name="Wigs & Hair Products",
        description="Premium wigs and hair care essentials",
        sections=(
            _section("human-hair", "Human Hair Wigs", "100% human hair quality", "human-hair.jpg"),
            _section("synthetic", "Synthetic Wigs", "Affordable and stylish", "synthetic.jpg"),
            _section("lace-frontal", "Lace Frontals", "Natural hairline wigs", "lace.jpg"),
            _section("hair-care", "Hair Care Products", "Shampoos, oils, and treatments", "hair-care.jpg"),
        ),
    ),
    Category(
        slug="soap-personal-care",
        name="Soap & Personal Care",
        description="Health and beauty essentials",
        sections=(
            _section("bath-soap", "Bath Soaps", "Cleansing and moisturizing", "soap.jpg"),
            _section("body-lotion", "Body Lotions", "Nourish your skin", "lotion.jpg"),
            _section("oral-care", "Oral Care", "Toothpaste and mouthwash", "oral.jpg"),
            _section("feminine-care", "Feminine Care", "Personal hygiene products", "feminine.jpg"),
        ),
    ),
)


def get_category(slug: str) -> Category | None:
    return next((category for category in CATEGORY_TREE if category.slug == slug), None)


def get_section(category_slug: str, section_slug: str) -> Section | None:
    category = get_category(category_slug)
    return category.section(section_slug) if category else None
