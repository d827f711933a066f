"""
Marketing-activity taxonomy.

``Activity`` enumerates the eighteen sales and marketing channels a tenant
may or may not already run.  Members are declared in catalogue order; that
order is the final tie-breaker wherever activities are ranked, so results
never depend on dict or set iteration order.

Enum values are snake_case identifiers.  The camelCase keys used by the
surrounding web application (``coldCalls``, ``seoContent``, ...) are
available through ``Activity.camel_key`` and accepted by
``Activity.from_key()``.

This module has NO imports from any other ``roi_advisor`` package.
"""

from __future__ import annotations

from enum import StrEnum


class Activity(StrEnum):
    """A sales or marketing channel that can be recommended."""

    COLD_CALLS = "cold_calls"
    """Outbound phone prospecting."""

    PERSONALIZED_FOLLOW_UP = "personalized_follow_up"
    """One-to-one follow-up sequences tailored per lead."""

    VIDEO_CALLS = "video_calls"
    """Remote demos and discovery calls over video."""

    TRANSACTIONAL_EMAILS = "transactional_emails"
    """Triggered and nurturing email flows."""

    SOCIAL_SELLING = "social_selling"
    """Prospecting and relationship building on social networks."""

    CONTENT_MARKETING = "content_marketing"
    """Articles, guides and other owned content aimed at buyers."""

    REFERRAL_PROGRAM = "referral_program"
    """Incentivised customer referrals."""

    WEBINARS_EVENTS = "webinars_events"
    """Hosted webinars and small online or local events."""

    PAID_ADS = "paid_ads"
    """Search and social paid advertising."""

    SEO_CONTENT = "seo_content"
    """Search-optimised organic content."""

    PARTNERSHIPS = "partnerships"
    """Co-selling and channel partnerships."""

    DIRECT_MAIL = "direct_mail"
    """Physical mail campaigns."""

    TRADE_SHOWS = "trade_shows"
    """Exhibiting at trade shows and conferences."""

    INFLUENCER_MARKETING = "influencer_marketing"
    """Paid or affiliate promotion by creators."""

    RETARGETING = "retargeting"
    """Ads shown to visitors who already interacted with the brand."""

    ACTIVATIONS = "activations"
    """In-person brand experiences."""

    PHYSICAL_VISITS = "physical_visits"
    """Field sales visits to prospects and accounts."""

    PERSONAL_BRAND = "personal_brand"
    """Founder or executive thought leadership."""

    @property
    def camel_key(self) -> str:
        """The camelCase key used by the web application (``coldCalls``)."""
        head, *rest = self.value.split("_")
        return head + "".join(part.capitalize() for part in rest)

    @property
    def display_name(self) -> str:
        return ACTIVITY_DISPLAY_NAMES[self]

    @property
    def catalogue_index(self) -> int:
        """Position in declaration order; used as a deterministic tie-breaker."""
        return _CATALOGUE_INDEX[self]

    @classmethod
    def from_key(cls, key: str) -> "Activity":
        """Resolve a snake_case value or camelCase key to a member.

        Raises:
            ValueError: If ``key`` names no activity.
        """
        try:
            return cls(key)
        except ValueError:
            pass
        for member in cls:
            if member.camel_key == key:
                return member
        raise ValueError(f"Unknown activity key: {key!r}")


ACTIVITY_DISPLAY_NAMES: dict[Activity, str] = {
    Activity.COLD_CALLS:             "Cold Calls",
    Activity.PERSONALIZED_FOLLOW_UP: "Personalized Follow-up",
    Activity.VIDEO_CALLS:            "Video Calls",
    Activity.TRANSACTIONAL_EMAILS:   "Transactional Emails",
    Activity.SOCIAL_SELLING:         "Social Selling",
    Activity.CONTENT_MARKETING:      "Content Marketing",
    Activity.REFERRAL_PROGRAM:       "Referral Program",
    Activity.WEBINARS_EVENTS:        "Webinars & Events",
    Activity.PAID_ADS:               "Paid Advertising",
    Activity.SEO_CONTENT:            "SEO & Organic Content",
    Activity.PARTNERSHIPS:           "Strategic Partnerships",
    Activity.DIRECT_MAIL:            "Direct Mail",
    Activity.TRADE_SHOWS:            "Trade Shows & Conferences",
    Activity.INFLUENCER_MARKETING:   "Influencer Marketing",
    Activity.RETARGETING:            "Retargeting Campaigns",
    Activity.ACTIVATIONS:            "Brand Activations",
    Activity.PHYSICAL_VISITS:        "Physical Visits",
    Activity.PERSONAL_BRAND:         "Personal Brand",
}

_CATALOGUE_INDEX: dict[Activity, int] = {a: i for i, a in enumerate(Activity)}
