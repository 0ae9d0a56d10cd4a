import pytest
from flask_jwt_extended import create_access_token

from handbook import create_app
from handbook.extensions import db as _db
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.models.user import User


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


def _make_user(email, role, password="secret123", name=None):
    user = User()
    user.email = email
    user.name = name or email.split("@")[0]
    user.role = role
    user.set_password(password)
    _db.session.add(user)
    _db.session.commit()
    return user


def _headers(user):
    token = create_access_token(
        identity=user.id,
        additional_claims={"email": user.email, "role": user.role},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(app):
    return _make_user


@pytest.fixture
def auth_headers(app):
    return _headers


@pytest.fixture
def admin(app):
    return _make_user("admin@example.com", "admin")


@pytest.fixture
def editor(app):
    return _make_user("editor@example.com", "editor")


@pytest.fixture
def reader(app):
    return _make_user("reader@example.com", "user")


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def editor_headers(editor):
    return _headers(editor)


@pytest.fixture
def reader_headers(reader):
    return _headers(reader)


@pytest.fixture
def make_section(app):
    def make(name, order_index=0, description=None, emoji=None):
        section = Section()
        section.name = name
        section.order_index = order_index
        section.description = description
        section.emoji = emoji
        _db.session.add(section)
        _db.session.commit()
        return section
    return make


@pytest.fixture
def make_item(app):
    def make(section, title, container_type="text", content=None, author=None,
             published=True, order_index=0):
        item = ContentItem()
        item.section_id = section.id
        item.title = title
        item.container_type = container_type
        item.content = {} if content is None else content
        item.author_id = author.id if author else None
        item.published = published
        item.order_index = order_index
        _db.session.add(item)
        _db.session.commit()
        return item
    return make
