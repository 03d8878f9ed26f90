"""Management command to find stored files no record points at.

A file is orphaned when its public URL (or storage path) appears in no user
picture, track image/audio or sound-kit image/file. This happens when a record
is deleted without its files, or when a client uploads a file and never
attaches it.

Usage:
    python manage.py find_orphaned_files             # list orphans
    python manage.py find_orphaned_files --delete    # asks for confirmation
    python manage.py find_orphaned_files --delete --yes
"""

from django.core.management.base import BaseCommand

from api.errors import ApiError, NotFound
from api.models import SoundKit, StoredFile, Track, User
from storage_service import get_upload_gateway

# (model, fields holding a file URL)
REFERENCING_FIELDS = [
    (User, ["profile_picture"]),
    (Track, ["track_image", "track_file", "musician_profile_picture"]),
    (SoundKit, ["kit_image", "kit_file", "producer_profile_picture"]),
]


def referenced_values():
    values = set()
    for model, fields in REFERENCING_FIELDS:
        for row in model.objects.values_list(*fields):
            values.update(v for v in row if v)
    return values


def find_orphans():
    """StoredFile rows whose path is not the suffix of any referenced URL."""
    refs = referenced_values()
    orphans = []
    for stored in StoredFile.objects.order_by("uploaded_at"):
        if not any(ref == stored.path or ref.endswith("/" + stored.path) for ref in refs):
            orphans.append(stored)
    return orphans


class Command(BaseCommand):
    help = (
        "List stored files that no user, track or sound kit references, "
        "and optionally delete them from storage."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Delete the orphaned files.",
        )
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Skip the confirmation prompt.",
        )

    def handle(self, *args, **options):
        orphans = find_orphans()

        if not orphans:
            self.stdout.write(self.style.SUCCESS("No orphaned files."))
            return

        self.stdout.write(f"\nOrphaned files ({len(orphans)}):")
        for stored in orphans:
            self.stdout.write(f"  {stored.path:<60} {stored.size:>12} bytes  {stored.original_name}")

        if not options["delete"]:
            self.stdout.write(self.style.NOTICE("\nRun with --delete to remove them."))
            return

        if not options["yes"]:
            confirm = input(
                "\nThis will permanently delete the files above from storage.\n"
                "Type 'yes' to continue: "
            )
            if confirm.strip().lower() != "yes":
                self.stdout.write(self.style.ERROR("Aborted."))
                return

        uploads = get_upload_gateway()
        removed = 0
        failed = 0
        for stored in orphans:
            try:
                uploads.remove(stored.path)
                removed += 1
            except NotFound:
                # Object already gone from storage: drop the stale row
                StoredFile.objects.filter(pk=stored.pk).delete()
                removed += 1
            except ApiError as e:
                failed += 1
                self.stderr.write(f"  could not remove {stored.path}: {e.message}")

        self.stdout.write(self.style.SUCCESS("\nDone."))
        self.stdout.write(f"  Files deleted : {removed}")
        if failed:
            self.stdout.write(f"  Failed        : {failed}")
