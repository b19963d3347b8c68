"""
OUTLINE admin console.

Usage:
    outline-admin --password <secret> courses list --category "Seoul" --search tiger
    outline-admin courses create --name "Tiger" --kml tiger.kml
    outline-admin courses ingest <course_id> track.kml
    outline-admin categories toggle <category_id> <course_id> <course_id>

The password can also be given as OUTLINE_PASSWORD. Every command checks it
before opening the store; --help needs no password.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator

import click

from outline_admin.config import Settings, settings as default_settings
from outline_admin.db.session import create_engine_for, create_session_factory, init_db
from outline_admin.features.categories import CategoryEditor, CategoryRepository
from outline_admin.features.courses import (
    AlleyLevel,
    Course,
    CourseIngestionPipeline,
    CourseLevel,
    CourseRepository,
    CourseService,
    PlaceResolver,
    ThumbnailKind,
    TrackFileParser,
    parse_location_input,
)
from outline_admin.features.dashboard import ALL_CATEGORIES, DashboardService
from outline_admin.shared.access import PasswordGate
from outline_admin.shared.errors import OutlineError
from outline_admin.shared.geo import track_length_km
from outline_admin.storage import LocalBlobStore, SQLDocumentStore

logger = logging.getLogger(__name__)


@dataclass
class Console:
    """Services wired to one document store, blob store and geocoder."""

    courses: CourseService
    course_repository: CourseRepository
    category_repository: CategoryRepository
    blobs: LocalBlobStore

    def dashboard(self) -> DashboardService:
        return DashboardService(self.course_repository, self.category_repository)

    def category_editor(self) -> CategoryEditor:
        return CategoryEditor(self.category_repository, self.course_repository, self.blobs)


@asynccontextmanager
async def open_console(config: Settings) -> AsyncIterator[Console]:
    """Create the stores once and hand them to every service."""
    engine = create_engine_for(config.database_url)
    try:
        await init_db(engine)
        store = SQLDocumentStore(create_session_factory(engine))
        blobs = LocalBlobStore(config.blob_dir, config.blob_public_base_url)
        resolver = PlaceResolver(
            api_key=config.geocoding_api_key or "",
            api_url=config.geocoding_api_url,
            language=config.geocoding_language or "",
            timeout=config.geocoding_timeout,
        )
        course_repository = CourseRepository(store, config.courses_collection)
        yield Console(
            courses=CourseService(
                course_repository,
                blobs,
                CourseIngestionPipeline(TrackFileParser(), resolver),
            ),
            course_repository=course_repository,
            category_repository=CategoryRepository(store, config.categories_collection),
            blobs=blobs,
        )
    finally:
        await engine.dispose()


def _run(ctx: click.Context, command) -> None:
    """Check the console password, then run an async command against a freshly opened console."""
    config: Settings = ctx.obj

    try:
        PasswordGate(config.admin_password or "").check(ctx.meta.get("password"))
    except OutlineError as e:
        raise click.ClickException(str(e)) from e

    async def main():
        async with open_console(config) as console:
            await command(console)

    try:
        asyncio.run(main())
    except OutlineError as e:
        raise click.ClickException(str(e)) from e


def _log_level(config: Settings) -> int:
    if config.debug:
        return logging.DEBUG
    return getattr(logging, config.log_level.upper(), logging.INFO)


def _format_course(course: Course) -> str:
    region = f" [{course.region_display_name}]" if course.region_display_name else ""
    return f"{course.id}  {course.course_name}{region}  {course.course_length} km"


@click.group()
@click.option("--password", envvar="OUTLINE_PASSWORD", default=None, help="Console password")
@click.pass_context
def cli(ctx, password):
    """OUTLINE admin console."""
    if not isinstance(ctx.obj, Settings):
        ctx.obj = default_settings
    config: Settings = ctx.obj

    logging.basicConfig(
        level=_log_level(config),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    ctx.meta["password"] = password


# =============================================================================
# Courses
# =============================================================================

@cli.group()
def courses():
    """Browse and edit courses."""
    pass


@courses.command("list")
@click.option("--category", default=ALL_CATEGORIES, help="Category title (default: All)")
@click.option("--search", default="", help="Filter by course name")
@click.pass_context
def list_courses(ctx, category, search):
    """List courses of the catalog or of one category."""

    async def command(console: Console):
        dashboard = console.dashboard()
        await dashboard.load()
        shown = dashboard.filter(category, search)
        if not shown:
            click.echo("No courses found.")
        for course in shown:
            click.echo(_format_course(course))

    _run(ctx, command)


@courses.command("show")
@click.argument("course_id")
@click.pass_context
def show_course(ctx, course_id):
    """Show one course."""

    async def command(console: Console):
        course = await console.courses.load(course_id)
        if course is None:
            raise click.ClickException(f"Course not found: {course_id}")
        click.echo(_format_course(course))
        click.echo(f"Level: {course.level.value}, alley: {course.alley.value}")
        if course.description:
            click.echo(course.description)
        click.echo(
            f"Track: {len(course.course_paths)} points, "
            f"{track_length_km(course.course_paths):.2f} km"
        )
        if course.location_info:
            click.echo(f"Location: {course.location_info.name}")
        for spot in course.hot_spots:
            where = (
                f" ({spot.location.longitude}, {spot.location.latitude})"
                if spot.location else ""
            )
            click.echo(f"  * {spot.title}{where}")

    _run(ctx, command)


@courses.command("create")
@click.option("--name", required=True, help="Course name")
@click.option("--length", default="", help="Course length (km)")
@click.option("--duration", default="", help="Course duration (minutes)")
@click.option("--description", default="")
@click.option("--region", default="", help="Region display name")
@click.option("--producer", default="")
@click.option("--level", type=click.Choice([lv.value for lv in CourseLevel]), default=CourseLevel.NORMAL.value)
@click.option("--alley", type=click.Choice([a.value for a in AlleyLevel]), default=AlleyLevel.NONE.value)
@click.option("--kml", "kml_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.pass_context
def create_course(ctx, name, length, duration, description, region, producer, level, alley, kml_file):
    """Create a course, optionally from a KML track."""

    async def command(console: Console):
        draft = console.courses.new_draft().model_copy(update={
            "course_name": name,
            "course_length": length,
            "course_duration": duration,
            "description": description,
            "region_display_name": region,
            "producer": producer,
            "level": CourseLevel(level),
            "alley": AlleyLevel(alley),
        })
        if kml_file is not None:
            draft = await console.courses.ingest_track(
                draft, kml_file.read_text(encoding="utf-8-sig")
            )
        created = await console.courses.create(draft)
        click.echo(f"Created course {created.id}")

    _run(ctx, command)


@courses.command("ingest")
@click.argument("course_id")
@click.argument("kml_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def ingest_course(ctx, course_id, kml_file):
    """Replace a course's track with a KML file and save it."""

    async def command(console: Console):
        course = await console.courses.load(course_id)
        if course is None:
            raise click.ClickException(f"Course not found: {course_id}")
        updated = await console.courses.ingest_track(
            course, kml_file.read_text(encoding="utf-8-sig")
        )
        await console.courses.save(updated)
        click.echo(
            f"Track: {len(updated.course_paths)} points, "
            f"{track_length_km(updated.course_paths):.2f} km"
        )
        if updated.location_info:
            click.echo(f"Location: {updated.location_info.name}")

    _run(ctx, command)


@courses.command("add-hotspot")
@click.argument("course_id")
@click.option("--title", required=True)
@click.option("--description", default="")
@click.option("--location", default=None, help='"longitude, latitude"')
@click.pass_context
def add_hotspot(ctx, course_id, title, description, location):
    """Append a hot spot to a course."""
    try:
        coordinate = parse_location_input(location) if location else None
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--location") from e

    async def command(console: Console):
        course = await console.courses.load(course_id)
        if course is None:
            raise click.ClickException(f"Course not found: {course_id}")
        updated = console.courses.add_hot_spot(course, title, description, coordinate)
        await console.courses.save(updated)
        click.echo(f"Course {course_id} now has {len(updated.hot_spots)} hot spots")

    _run(ctx, command)


@courses.command("thumbnail")
@click.argument("course_id")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--kind", type=click.Choice(["main", "neon", "long"]), default="main")
@click.pass_context
def course_thumbnail(ctx, course_id, image, kind):
    """Upload a course thumbnail."""
    thumbnail_kind = {
        "main": ThumbnailKind.MAIN,
        "neon": ThumbnailKind.NEON,
        "long": ThumbnailKind.LONG,
    }[kind]

    async def command(console: Console):
        course = await console.courses.load(course_id)
        if course is None:
            raise click.ClickException(f"Course not found: {course_id}")
        updated = await console.courses.upload_thumbnail(
            course, image.read_bytes(), image.name, thumbnail_kind
        )
        await console.courses.save(updated)
        click.echo(updated.to_fields()[thumbnail_kind.value])

    _run(ctx, command)


# =============================================================================
# Categories
# =============================================================================

@cli.group()
def categories():
    """Order courses within categories."""
    pass


@categories.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories."""

    async def command(console: Console):
        for category in await console.category_repository.list_all():
            click.echo(f"{category.id}  {category.title}  ({len(category.course_id_list)} courses)")

    _run(ctx, command)


async def _load_editor(console: Console, category_id: str) -> CategoryEditor:
    editor = console.category_editor()
    await editor.load()
    category = editor.find_category(category_id)
    if category is None:
        raise click.ClickException(f"Category not found: {category_id}")
    editor.select(category)
    return editor


def _echo_selection(editor: CategoryEditor, selected: list[str], ordinals: dict[str, int]) -> None:
    names = {course.id: course.course_name for course in editor.courses}
    for course_id in selected:
        click.echo(f"{ordinals[course_id]:>3}. {names.get(course_id, '(missing)')}  {course_id}")


@categories.command("show")
@click.argument("category_id")
@click.pass_context
def show_category(ctx, category_id):
    """Show a category's courses with their order."""

    async def command(console: Console):
        editor = await _load_editor(console, category_id)
        click.echo(editor.selected_category.title)
        _echo_selection(editor, editor.ordering.selected, editor.ordering.ordinals)

    _run(ctx, command)


@categories.command("toggle")
@click.argument("category_id")
@click.argument("course_ids", nargs=-1, required=True)
@click.pass_context
def toggle_courses(ctx, category_id, course_ids):
    """Toggle courses in or out of a category, in the given order, then save."""

    async def command(console: Console):
        editor = await _load_editor(console, category_id)
        selected, ordinals = editor.ordering.selected, editor.ordering.ordinals
        for course_id in course_ids:
            selected, ordinals = editor.toggle(course_id)
        await editor.save()
        _echo_selection(editor, selected, ordinals)

    _run(ctx, command)


@categories.command("thumbnail")
@click.argument("category_id")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def category_thumbnail(ctx, category_id, image):
    """Replace a category's thumbnail."""

    async def command(console: Console):
        editor = await _load_editor(console, category_id)
        editor.set_thumbnail(image.read_bytes(), image.name)
        await editor.save()
        saved = await console.category_repository.get_by_id(category_id)
        click.echo(saved.thumbnail_url)

    _run(ctx, command)


if __name__ == "__main__":
    cli()
