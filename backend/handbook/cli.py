# handbook/cli.py
"""
Maintenance commands, registered on the Flask CLI::

    flask content analyze
    flask content normalize [--apply]
    flask content duplicates
    flask content migrate-containers
    flask users create-admin EMAIL
"""
import json
from collections import Counter, defaultdict

import click
from flask.cli import AppGroup

from handbook.extensions import db
from handbook.containers.normalizer import has_complex_structure, normalize_content
from handbook.models.container_instance import ContainerInstance
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.application.accounts.register_user import create_user
from handbook.utils.transaction import transactional

content_cli = AppGroup("content", help="Inspect and repair stored content.")
users_cli = AppGroup("users", help="Manage accounts.")


def _items_by_section():
    return (
        ContentItem.query.join(Section)
        .order_by(Section.name.asc(), ContentItem.title.asc())
        .all()
    )


@content_cli.command("analyze")
@click.option("--examples", default=3, show_default=True, help="Examples shown per type.")
def analyze(examples):
    """Summarize content shapes per container type and flag nested ones."""
    items = _items_by_section()
    click.echo(f"Found {len(items)} content items")

    by_type = defaultdict(list)
    for item in items:
        by_type[item.container_type].append(item)

    for container_type, group in sorted(by_type.items()):
        click.echo(f"\n=== {container_type.upper()} ({len(group)} items) ===")
        for item in group[:examples]:
            keys = ", ".join(item.content.keys()) if isinstance(item.content, dict) else type(item.content).__name__
            click.echo(f'  "{item.title}" ({item.section.name}) keys: [{keys}]')

    problematic = [i for i in items if has_complex_structure(i.content) and i.container_type == "text"]
    click.echo(f"\n=== POTENTIALLY PROBLEMATIC CONTENT ({len(problematic)}) ===")
    for item in problematic:
        dump = json.dumps(item.content, default=str)
        click.echo(f'  "{item.title}" ({item.section.name}) - {item.container_type}: {dump[:200]}')


@content_cli.command("normalize")
@click.option("--apply", "apply_changes", is_flag=True, help="Write repaired content back.")
def normalize(apply_changes):
    """Repair stored content into canonical shapes. Dry run unless --apply."""
    changed = []
    for item in ContentItem.query.order_by(ContentItem.created_at.asc()).all():
        content, container_type = normalize_content(item.content, item.container_type)
        if content != item.content or container_type != item.container_type:
            changed.append((item, content, container_type))
            click.echo(f'  "{item.title}": {item.container_type} -> {container_type}')

    if apply_changes and changed:
        with transactional():
            for item, content, container_type in changed:
                item.content = content
                item.container_type = container_type

    verb = "Repaired" if apply_changes else "Would repair"
    click.echo(f"{verb} {len(changed)} content items")


@content_cli.command("duplicates")
def duplicates():
    """List content items sharing a title within one section."""
    found = 0
    for section in Section.query.order_by(Section.name.asc()).all():
        titles = Counter(i.title for i in section.content_items)
        for title, count in sorted(titles.items()):
            if count > 1:
                found += 1
                click.echo(f'  {section.name}: "{title}" x{count}')

    click.echo(f"{found} duplicate titles" if found else "No duplicates found")


@content_cli.command("migrate-containers")
def migrate_containers():
    """
    Copy each item's own content into a first container instance.

    Items that already have container instances are skipped, so the
    command can be re-run.
    """
    migrated = (
        db.session.query(ContainerInstance.content_item_id).distinct()
    )
    items = ContentItem.query.filter(~ContentItem.id.in_(migrated)).all()

    with transactional():
        for item in items:
            container = ContainerInstance()
            container.content_item_id = item.id
            container.container_type = item.container_type
            container.content = item.content if item.content is not None else {}
            container.order_index = 0
            db.session.add(container)

    click.echo(f"Migrated {len(items)} content items")


@users_cli.command("create-admin")
@click.argument("email")
@click.option("--name", default=None)
@click.password_option()
def create_admin(email, name, password):
    """Create an admin account."""
    user = create_user(email=email, password=password, name=name, role="admin")
    click.echo(f"Created admin {user.email} ({user.id})")


def register_cli(app):
    app.cli.add_command(content_cli)
    app.cli.add_command(users_cli)
