from django.core.management.base import BaseCommand

from reservations.services.projector_service import DEFAULT_INVENTORY_SIZE, ProjectorService
from reservations.stores.django_store import DjangoProjectorStore


class Command(BaseCommand):
    help = "Registers the initial projector inventory when none exists"

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=DEFAULT_INVENTORY_SIZE)

    def handle(self, *args, **options):
        created = ProjectorService(DjangoProjectorStore()).seed_inventory(options["count"])
        if not created:
            self.stdout.write(self.style.WARNING("Projectors already registered; nothing to do."))
            return
        for projector in created:
            self.stdout.write(f"   Created {projector.name}")
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(created)} projectors."))
