"""Create a demo show so an empty database has something to sell."""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from boxoffice.domain.errors import DomainError
from boxoffice.services.hold_service import utc_now
from boxoffice.wiring import build_box_office


class Command(BaseCommand):
    help = "Create a demo show when no show exists yet."

    def add_arguments(self, parser):
        parser.add_argument("--title", default="Demo Show")
        parser.add_argument("--rows", type=int, default=6)
        parser.add_argument("--cols", type=int, default=10)
        parser.add_argument("--price", type=Decimal, default=Decimal("10.00"))
        parser.add_argument(
            "--starts-in-hours",
            type=int,
            default=2,
            help="Hours from now until the show starts.",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Create the show even if other shows exist.",
        )

    def handle(self, *args, **options):
        box_office = build_box_office()
        if box_office.inventory.list_shows() and not options["force"]:
            self.stdout.write("Shows already exist; nothing to do.")
            return

        try:
            show = box_office.inventory.create_show(
                title=options["title"],
                starts_at=utc_now() + timedelta(hours=options["starts_in_hours"]),
                rows=options["rows"],
                cols=options["cols"],
                price=options["price"],
            )
        except DomainError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Created show {show.id} ({show.grid.rows}x{show.grid.cols} seats)"
            )
        )
