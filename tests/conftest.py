"""Shared test fixtures."""
import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from werkzeug.security import generate_password_hash

from outreach.database import Base, import_models

# Fast hash for fixtures; production uses werkzeug's default method
TEST_HASH_METHOD = 'pbkdf2:sha256:1000'


class FakeRedis:
    """Minimal in-memory Redis fake covering the hash commands breakers use."""

    def __init__(self):
        self.hash_store = {}

    def hset(self, key, field=None, value=None, mapping=None):
        h = self.hash_store.setdefault(key, {})
        if mapping:
            h.update({k: str(v) for k, v in mapping.items()})
        if field is not None:
            h[field] = str(value)

    def hgetall(self, key):
        return dict(self.hash_store.get(key, {}))

    def delete(self, *keys):
        for k in keys:
            self.hash_store.pop(k, None)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    import_models()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_session):
    """Route all get_session() calls to the test session.

    We disable close() so that services calling session.close()
    in their finally blocks don't invalidate the shared test session.
    """
    _real_close = db_session.close
    db_session.close = lambda: None
    with patch('outreach.database.SessionLocal', return_value=db_session):
        yield db_session
    db_session.close = _real_close


@pytest.fixture(autouse=True)
def fake_redis():
    """Fresh breaker registry backed by an in-memory Redis fake."""
    from outreach.services.circuit_breaker import _registry, init_breakers
    redis = FakeRedis()
    _registry.clear()
    init_breakers(redis)
    yield redis
    _registry.clear()


@pytest.fixture(autouse=True)
def offline():
    """Keep every remote side channel switched off unless a test opts in."""
    with patch('outreach.services.analyzer.ANALYZER_URL', None), \
            patch('outreach.services.pages.FETCH_PAGE_METADATA', False), \
            patch('outreach.services.notifications.SLACK_WEBHOOK_URL', None), \
            patch('outreach.services.r2.r2_client', None):
        yield


@pytest.fixture
def app(fake_redis):
    """Flask test app."""
    with patch('outreach.extensions.redis_client', fake_redis):
        from outreach import create_app
        app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_user(db_session):
    """Factory fixture — registers an identity and sets the profile's role/status."""
    from outreach.auth import CurrentUser
    from outreach.models.user import AuthIdentity, User

    counter = {'n': 0}

    def _make(role='analyst', status='active', email=None, name=None, password='secret-pass'):
        counter['n'] += 1
        email = email or f'user{counter["n"]}@example.com'
        identity = AuthIdentity(
            email=email,
            password_hash=generate_password_hash(password, method=TEST_HASH_METHOD),
            user_metadata={'name': name or f'User {counter["n"]}'},
        )
        db_session.add(identity)
        db_session.flush()
        profile = db_session.get(User, identity.id)
        profile.role = role
        profile.status = status
        db_session.commit()
        return CurrentUser.from_model(profile)
    return _make


@pytest.fixture
def login_as(client):
    """Put a user id in the test client's session."""
    def _login(user):
        with client.session_transaction() as s:
            s['user_id'] = user.id
        return user
    return _login


@pytest.fixture
def make_analysis(db_session):
    """Factory fixture — page + analysis rows with a fixed score."""
    from outreach.models.analysis import Analysis
    from outreach.models.page import Page
    from outreach.services.analyzer import decide_need

    def _make(user, score=50, url=None, name='Sample Page', issues=None):
        url = url or f'https://facebook.com/{name.lower().replace(" ", "-")}'
        page = db_session.query(Page).filter_by(url=url).first()
        if page is None:
            page = Page(url=url, name=name, created_by=user.id)
            db_session.add(page)
            db_session.flush()
        analysis = Analysis(
            page_id=page.id,
            overall_score=score,
            issues=issues if issues is not None else [
                {'type': 'UX', 'severity': 'High', 'description': 'The call to action is unclear.'},
            ],
            suggestions=[],
            need_decision=decide_need(score),
            confidence_score=0.8,
            rationale='fixture',
            analyzed_by=user.id,
        )
        db_session.add(analysis)
        db_session.commit()
        return analysis
    return _make
