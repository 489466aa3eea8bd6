"""Seed sample products for development.

Re-running is idempotent; existing products are matched by name and their
attributes refreshed.
"""

from catalog.models import Product
from django.core.management.base import BaseCommand
from django.db import transaction

PRODUCTS = [
    {
        "name": "Studio Monitor Speakers",
        "description": "High-fidelity nearfield monitors for accurate mixing.",
        "price_cents": 29999,
        "image_url": "https://images.example.com/monitor-speakers.jpg",
    },
    {
        "name": "HDMI 2.1 Cable 2m",
        "description": "Ultra High Speed HDMI cable supporting 8K video.",
        "price_cents": 1999,
        "image_url": "https://images.example.com/hdmi-cable.jpg",
    },
    {
        "name": "USB Audio Interface",
        "description": "Two-input interface with low-latency monitoring.",
        "price_cents": 14900,
        "image_url": "https://images.example.com/audio-interface.jpg",
    },
    {
        "name": "Condenser Microphone",
        "description": "Large-diaphragm cardioid microphone for vocals.",
        "price_cents": 8950,
        "image_url": "https://images.example.com/condenser-mic.jpg",
    },
    {
        "name": "Closed-Back Headphones",
        "description": "Isolating headphones for tracking and critical listening.",
        "price_cents": 12500,
        "image_url": "https://images.example.com/headphones.jpg",
    },
]


class Command(BaseCommand):
    help = "Seed sample catalog products"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog data...")
        created_count = 0
        for data in PRODUCTS:
            _, created = Product.objects.update_or_create(
                name=data["name"],
                defaults={k: v for k, v in data.items() if k != "name"},
            )
            created_count += int(created)
        self.stdout.write(
            self.style.SUCCESS(f"Catalog seeded: {created_count} created, {len(PRODUCTS) - created_count} updated.")
        )
