# sales/management/commands/seed_store.py

"""
Seed a development store:
- admin + customer users
- client types, categories, sizes
- products (random price / stock)
- sample customers
- optional sample sales (--sales N), created through the real checkout service

Idempotent for reference data (get_or_create); sales are appended.
"""

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from customers.models import Customer
from permissions.roles import ROLE_ADMIN, ROLE_CUSTOMER
from products.models import Category, ClientType, Product, Size
from sales.services.exceptions import SaleServiceError
from sales.services.sale_creation import create_sale
from users.models import User

CLIENT_TYPES = ["Mujer", "Hombre", "Niño", "Niña"]

CATEGORIES = [
    "Abrigos",
    "Bermudas",
    "Buzos",
    "Camisas",
    "Faldas",
    "Hogar",
    "Jeans",
    "Pantalones",
    "Pijamas",
    "Ropa Interior",
    "Terceras Piezas",
    "T-Shirts",
    "Vestidos",
    "Polos",
    "Ropa de Baño",
]

ADULT_SIZES = ["XXS", "XS", "S", "M", "L", "XL"]
KID_SIZES = ["4", "6", "8", "10", "12", "14", "16"]

SIZES_BY_CLIENT_TYPE = {
    "Mujer": ADULT_SIZES,
    "Hombre": ADULT_SIZES,
    "Niño": KID_SIZES,
    "Niña": KID_SIZES,
}

# (name, category, client type)
PRODUCTS = [
    ("ABRIGO", "Abrigos", "Mujer"),
    ("BERMUDA", "Bermudas", "Mujer"),
    ("BUZOS", "Buzos", "Mujer"),
    ("CAMISAS", "Camisas", "Mujer"),
    ("FALDA", "Faldas", "Mujer"),
    ("JEANS TERMINADOS", "Jeans", "Mujer"),
    ("BUZO", "Buzos", "Hombre"),
    ("POLOS", "Polos", "Hombre"),
    ("PANTALONES", "Pantalones", "Niño"),
    ("ROPA DE BAÑO", "Ropa de Baño", "Niño"),
    ("TSHIRT TERMINADA", "T-Shirts", "Niña"),
    ("VESTIDOS", "Vestidos", "Niña"),
]

# (name, email, phone, client type)
CUSTOMERS = [
    ("María García", "maria@example.com", "+57 300 123 4567", "Mujer"),
    ("Juan Pérez", "juan@example.com", "+57 300 234 5678", "Hombre"),
    ("Ana Martínez", "ana@example.com", "+57 300 345 6789", "Mujer"),
    ("Carlos Rodríguez", "carlos@example.com", "+57 300 456 7890", "Hombre"),
    ("Laura Sánchez", "laura@example.com", "+57 300 567 8901", "Mujer"),
]


class Command(BaseCommand):
    help = "Seed users, catalog, customers and (optionally) sample sales"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password123", help="Password for seeded users")
        parser.add_argument("--sales", type=int, default=0, help="Number of sample sales to create")
        parser.add_argument("--seed", type=int, default=None, help="Random seed (repeatable runs)")

    def handle(self, *args, **options):
        if options["sales"] < 0:
            raise CommandError("--sales must be >= 0")

        rng = random.Random(options["seed"])

        self.stdout.write(self.style.WARNING("Seeding store..."))

        with transaction.atomic():
            self._seed_users(options["password"])
            client_types = self._seed_client_types()
            categories = self._seed_categories()
            sizes = self._seed_sizes()
            products = self._seed_products(rng, client_types, categories, sizes)
            customers = self._seed_customers(client_types)

        created = self._seed_sales(rng, options["sales"], products, customers)

        self.stdout.write(
            self.style.SUCCESS(
                f"Store seeded: {len(products)} products, {len(customers)} customers, "
                f"{created} new sales."
            )
        )

    # -------------------------------
    # USERS
    # -------------------------------
    def _seed_users(self, password):
        for email, name, role in (
            ("admin@example.com", "Admin User", ROLE_ADMIN),
            ("customer@example.com", "Customer User", ROLE_CUSTOMER),
        ):
            user = User.objects.filter(email=email).first()
            if user is None:
                User.objects.create_user(
                    email=email,
                    password=password,
                    name=name,
                    role=role,
                    is_staff=role == ROLE_ADMIN,
                )
                self.stdout.write(f"Created {role} user: {email}")

    # -------------------------------
    # REFERENCE DATA
    # -------------------------------
    def _seed_client_types(self):
        return {name: ClientType.objects.get_or_create(name=name)[0] for name in CLIENT_TYPES}

    def _seed_categories(self):
        return {name: Category.objects.get_or_create(name=name)[0] for name in CATEGORIES}

    def _seed_sizes(self):
        names = dict.fromkeys(ADULT_SIZES + KID_SIZES)
        return {name: Size.objects.get_or_create(name=name)[0] for name in names}

    # -------------------------------
    # PRODUCTS
    # -------------------------------
    def _seed_products(self, rng, client_types, categories, sizes):
        products = []
        for name, category_name, client_type_name in PRODUCTS:
            product, created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "category": categories[category_name],
                    "client_type": client_types[client_type_name],
                    "price": Decimal(rng.randint(20000, 500000)),
                    "stock": rng.randint(50, 250),
                    "description": f"Producto {name} de la categoría {category_name}",
                },
            )
            if created:
                product.sizes.set(sizes[s] for s in SIZES_BY_CLIENT_TYPE[client_type_name])
            products.append(product)
        return products

    # -------------------------------
    # CUSTOMERS
    # -------------------------------
    def _seed_customers(self, client_types):
        customers = []
        for name, email, phone, client_type_name in CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={
                    "name": name,
                    "phone": phone,
                    "client_type": client_types[client_type_name],
                },
            )
            customers.append(customer)
        return customers

    # -------------------------------
    # SALES (through the checkout service)
    # -------------------------------
    def _seed_sales(self, rng, count, products, customers):
        created = 0
        now = timezone.now()

        for _ in range(count):
            product = Product.objects.get(pk=rng.choice(products).pk)
            if product.stock <= 0:
                continue

            quantity = rng.randint(1, min(5, product.stock))
            audience = getattr(product.client_type, "name", None)
            size = rng.choice(SIZES_BY_CLIENT_TYPE.get(audience, ADULT_SIZES))
            when = now - timedelta(seconds=rng.randint(0, 180 * 24 * 3600))

            try:
                create_sale(
                    customer_id=rng.choice(customers).pk,
                    items=[
                        {
                            "product_id": product.pk,
                            "quantity": quantity,
                            "price": product.price,
                            "size": size,
                        }
                    ],
                    total=product.price * quantity,
                    sale_date=when,
                )
            except SaleServiceError as exc:
                self.stdout.write(self.style.WARNING(f"Skipped sample sale: {exc}"))
                continue

            created += 1

        return created
