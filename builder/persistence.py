"""
ORM-backed persisters for a SyncSession, going through the same
whitelisted update serializer as PUT /api/portfolios/<id>/.
"""
import logging

from django.db import connection

from portfolios.models      import Portfolio
from portfolios.serializers import PortfolioSerializer, UpdatePortfolioSerializer

from .sync import create_sync_session

logger = logging.getLogger(__name__)


def _apply_update(portfolio_id, user, data):
    # raises Portfolio.DoesNotExist / ValidationError; the session decides what to surface
    try:
        portfolio  = Portfolio.objects.get(pk=portfolio_id, user=user)
        serializer = UpdatePortfolioSerializer(portfolio, data=data, partial=True)
        serializer.is_valid(raise_exception=True)
        return serializer.save()
    finally:
        _release_connection()


def _release_connection():
    # Timer threads run outside the request cycle, so nothing else closes their
    # connection. A connection inside an atomic block belongs to the caller.
    if not connection.in_atomic_block:
        connection.close()


def portfolio_persister(portfolio_id, user):
    def persist(content, title, description):
        _apply_update(portfolio_id, user, {
            'content':       content,
            'title':         title,
            'description':   description,
            'hasBeenEdited': True,
        })
        logger.debug('Saved portfolio %s', portfolio_id)
    return persist


def portfolio_template_persister(portfolio_id, user):
    def persist_template(template_id):
        _apply_update(portfolio_id, user, {'templateId': template_id})
        logger.info('Portfolio %s switched to template %s', portfolio_id, template_id)
    return persist_template


def open_portfolio_session(portfolio, **kwargs):
    """
    Start a builder session for `portfolio`, seeded with its resolved
    content (the linked profile's content when the link is intact).
    """
    data = PortfolioSerializer(portfolio).data
    return create_sync_session(
        data['content'],
        data['title'] or 'My Portfolio',
        data['description'],
        portfolio_persister(portfolio.pk, portfolio.user),
        persist_template=portfolio_template_persister(portfolio.pk, portfolio.user),
        template_id=portfolio.template_id,
        **kwargs
    )
