from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase

from builder.exceptions import SaveFailed
from builder.persistence import open_portfolio_session, portfolio_persister
from portfolios.models import Portfolio
from profiles.models import Profile

User = get_user_model()


class ImmediateTimer:
    """Runs the callback as soon as it is started."""

    def __init__(self, delay, fn):
        self.fn = fn

    def start(self):
        self.fn()

    def cancel(self):
        pass


class PortfolioSessionTest(TestCase):
    """Test builder sessions backed by the database."""

    def setUp(self):
        self.user = User.objects.create_user(email='ada@example.com', password='Analytical1843', name='Ada')
        self.profile = Profile.objects.create(
            user=self.user, name='Main', content={'personalInfo': {'name': 'Ada'}, 'skills': ['Math']},
        )
        self.portfolio = Portfolio.objects.create(
            user=self.user, profile_id=self.profile.pk, content={'personalInfo': {'name': 'Old'}},
        )

    def test_session_starts_from_resolved_content(self):
        session = open_portfolio_session(self.portfolio)
        self.assertEqual(session.content['personalInfo']['name'], 'Ada')
        self.assertEqual(session.title, 'My Portfolio')
        self.assertEqual(session.template_id, 'minimal')

    def test_auto_save_writes_snapshot(self):
        session = open_portfolio_session(self.portfolio, timer_factory=ImmediateTimer)
        session.mutate('skills', 'Python, Django')
        session.set_title('Ada Lovelace')

        self.portfolio.refresh_from_db()
        self.assertEqual(self.portfolio.content['skills'], ['Python', 'Django'])
        self.assertEqual(self.portfolio.title, 'Ada Lovelace')
        self.assertTrue(self.portfolio.has_been_edited)
        self.assertFalse(session.has_unsaved_changes)

    def test_template_change_persists(self):
        session = open_portfolio_session(self.portfolio)
        session.set_template('corporate')
        self.portfolio.refresh_from_db()
        self.assertEqual(self.portfolio.template_id, 'corporate')

    def test_unknown_template_is_rejected(self):
        session = open_portfolio_session(self.portfolio)
        with self.assertLogs('builder.sync', level='WARNING'):
            with self.assertRaises(SaveFailed):
                session.set_template('neon')
        self.portfolio.refresh_from_db()
        self.assertEqual(self.portfolio.template_id, 'minimal')

    def test_persister_scoped_to_owner(self):
        other = User.objects.create_user(email='bob@example.com', password='Builder12345', name='Bob')
        persist = portfolio_persister(self.portfolio.pk, other)
        with self.assertRaises(Portfolio.DoesNotExist):
            persist({}, 'Hijack', '')


class PersisterConnectionTest(TestCase):
    """Test persisters release the connection of a timer thread."""

    def setUp(self):
        self.user = User.objects.create_user(email='ada@example.com', password='Analytical1843', name='Ada')
        self.portfolio = Portfolio.objects.create(user=self.user, content={})

    @mock.patch('builder.persistence.connection')
    def test_connection_closed_after_save(self, conn):
        conn.in_atomic_block = False
        portfolio_persister(self.portfolio.pk, self.user)({}, 'Title', '')
        conn.close.assert_called_once_with()

    @mock.patch('builder.persistence.connection')
    def test_connection_closed_after_failed_save(self, conn):
        conn.in_atomic_block = False
        other = User.objects.create_user(email='bob@example.com', password='Builder12345', name='Bob')
        with self.assertRaises(Portfolio.DoesNotExist):
            portfolio_persister(self.portfolio.pk, other)({}, 'Title', '')
        conn.close.assert_called_once_with()

    @mock.patch('builder.persistence.connection')
    def test_connection_kept_inside_transaction(self, conn):
        """Test a caller's open transaction keeps its connection."""
        conn.in_atomic_block = True
        portfolio_persister(self.portfolio.pk, self.user)({}, 'Title', '')
        conn.close.assert_not_called()
