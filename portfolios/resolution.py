"""
Which content payload a reader sees for a portfolio.

Every reader (owner fetch, update response, public page, listings) goes
through `resolve_content`, so they cannot disagree.
"""
import logging

from profiles.models import Profile

logger = logging.getLogger(__name__)


def lookup_owned_profile(profile_id, user_id):
    """Default profile lookup: the profile only counts if the same user owns it."""
    return Profile.objects.filter(pk=profile_id, user_id=user_id).first()


def resolve_content(portfolio, profile_lookup=lookup_owned_profile):
    """
    Returns the linked profile's current content when `portfolio.profile_id`
    resolves to a profile of the portfolio's owner, otherwise the portfolio's
    own stored snapshot. Never writes, never raises for a broken link.

    Args:
        portfolio: object with `profile_id`, `user_id` and `content`
        profile_lookup: callable (profile_id, user_id) -> profile or None
    """
    if portfolio.profile_id is None:
        return portfolio.content

    profile = profile_lookup(portfolio.profile_id, portfolio.user_id)
    if profile is None:
        logger.warning(
            'Portfolio %s links missing profile %s; serving stored snapshot',
            portfolio.pk, portfolio.profile_id,
        )
        return portfolio.content

    return profile.content


def bulk_profile_lookup(portfolios):
    """
    Lookup for resolving many portfolios with one query; same ownership
    rule as `lookup_owned_profile`.
    """
    ids = {p.profile_id for p in portfolios if p.profile_id is not None}
    profiles = {p.pk: p for p in Profile.objects.filter(pk__in=ids)} if ids else {}

    def lookup(profile_id, user_id):
        profile = profiles.get(profile_id)
        if profile is not None and profile.user_id == user_id:
            return profile
        return None

    return lookup
