"""
Tests for entitlement decisions.
"""
import pytest
from types import SimpleNamespace

from content_planner.errors import PolicyDenied
from content_planner.services.policy import (
    PremiumFeature,
    can_apply_template,
    ensure_entitled,
    is_entitled,
    is_premium_feature_allowed,
)

FREE_TEMPLATE = SimpleNamespace(is_premium=False)
PREMIUM_TEMPLATE = SimpleNamespace(is_premium=True)


def user_with(status):
    return SimpleNamespace(subscription_status=status)


class TestTemplatePolicy:

    @pytest.mark.parametrize("status", ["free", "cancelled", "past_due", None, "ACTIVE"])
    def test_premium_template_denied_without_active_subscription(self, status):
        assert can_apply_template(user_with(status), PREMIUM_TEMPLATE) is False

    def test_premium_template_allowed_for_active_subscription(self):
        assert can_apply_template(user_with("active"), PREMIUM_TEMPLATE) is True

    @pytest.mark.parametrize("user", [None, user_with("free"), user_with("active"), user_with("past_due")])
    def test_free_template_allowed_for_anyone(self, user):
        assert can_apply_template(user, FREE_TEMPLATE) is True

    def test_anonymous_user_cannot_apply_premium(self):
        assert can_apply_template(None, PREMIUM_TEMPLATE) is False

    def test_object_without_status_is_not_entitled(self):
        assert is_premium_feature_allowed(object()) is False


class TestPremiumFeatures:

    @pytest.mark.parametrize("feature", list(PremiumFeature))
    def test_features_follow_subscription(self, feature):
        assert is_entitled(user_with("active"), feature) is True
        assert is_entitled(user_with("free"), feature) is False
        assert is_entitled(None, feature) is False

    def test_ensure_entitled_raises_with_reason(self):
        with pytest.raises(PolicyDenied) as exc:
            ensure_entitled(user_with("free"), PremiumFeature.PDF_EXPORT)
        assert "premium" in exc.value.reason

    def test_ensure_entitled_template_reason(self):
        with pytest.raises(PolicyDenied) as exc:
            ensure_entitled(None, PREMIUM_TEMPLATE)
        assert exc.value.reason == "This template requires a premium subscription"

    def test_ensure_entitled_passes_for_active(self):
        ensure_entitled(user_with("active"), PremiumFeature.TEST_REMINDER)
