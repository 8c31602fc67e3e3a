"""
Tests for request signing.
"""
import hashlib
import re
from urllib.parse import parse_qsl, urlsplit

from casagateway.config import GatewayConfig
from casagateway.errors import ConfigurationError
from casagateway.profiles import FRAMER, LISTINGS, PROPERTIES
from casagateway.signer import (
    SigningParameter,
    SigningRequest,
    canonical_string,
    collect_parameters,
    compute_digest,
    current_timestamp,
    sign,
    sort_parameters,
)

TIMESTAMP = 1700000000000


def _params(*pairs):
    return [SigningParameter(key, value) for key, value in pairs]


class TestSortParameters:
    """Tests for parameter ordering."""

    def test_known_keys_in_alphabetical_order(self):
        params = _params(("type", "rent"), ("availability", "active"), ("offset", "20"),
                         ("format", "swissrets:2.7"), ("company", "acme"), ("limit", "10"))

        keys = [param.key for param in sort_parameters(params)]

        assert keys == ["availability", "company", "format", "limit", "offset", "type"]

    def test_lowercase_sorts_before_uppercase_on_ties(self):
        keys = [param.key for param in sort_parameters(_params(("B", "1"), ("b", "2"), ("a", "3")))]

        assert keys == ["a", "b", "B"]

    def test_insertion_order_does_not_change_canonical_string(self):
        forward = _params(("company", "acme"), ("format", "swissrets:2.7"), ("limit", "5"))
        backward = list(reversed(forward))

        first = canonical_string(SigningRequest(tuple(forward), "secret", TIMESTAMP))
        second = canonical_string(SigningRequest(tuple(backward), "secret", TIMESTAMP))

        assert first == second


class TestCanonicalString:
    """Tests for the digest input and the digest itself."""

    def test_no_separators(self):
        request = SigningRequest(
            tuple(_params(("format", "swissrets:2.7"), ("company", "acme"), ("limit", "10"))),
            "secret",
            TIMESTAMP,
        )

        assert canonical_string(request) == "companyacmeformatswissrets:2.7limit10secret1700000000000"

    def test_digest_is_sha256_of_canonical_string(self):
        request = SigningRequest(tuple(_params(("format", "swissrets:2.7"))), "secret", TIMESTAMP)

        expected = hashlib.sha256(b"formatswissrets:2.7secret1700000000000").hexdigest()

        assert compute_digest(request) == expected

    def test_digest_is_64_lowercase_hex_chars(self):
        request = SigningRequest(tuple(_params(("format", "swissrets:2.7"))), "secret", TIMESTAMP)

        assert re.fullmatch(r"[0-9a-f]{64}", compute_digest(request))

    def test_same_inputs_same_digest(self):
        params = tuple(_params(("company", "acme"), ("format", "swissrets:2.7")))

        assert compute_digest(SigningRequest(params, "k", TIMESTAMP)) == \
            compute_digest(SigningRequest(params, "k", TIMESTAMP))

    def test_timestamp_changes_digest(self):
        params = tuple(_params(("format", "swissrets:2.7"),))

        assert compute_digest(SigningRequest(params, "k", TIMESTAMP)) != \
            compute_digest(SigningRequest(params, "k", TIMESTAMP + 1))

    def test_current_timestamp_is_milliseconds(self):
        # anything after 2020-01-01 in ms has 13 digits
        assert len(str(current_timestamp())) == 13


class TestCollectParameters:
    """Tests for choosing which options are signed."""

    def test_format_defaults_when_absent(self, config):
        params = collect_parameters({}, LISTINGS, config)

        assert params == [SigningParameter("format", "swissrets:2.7")]

    def test_empty_values_are_dropped(self, config):
        params = collect_parameters({"company": "", "limit": None, "type": "rent"}, LISTINGS, config)

        assert [param.key for param in params] == ["format", "type"]

    def test_params_outside_profile_are_ignored(self, config):
        params = collect_parameters({"company": "acme", "limit": "10"}, PROPERTIES, config)

        assert [param.key for param in params] == ["company", "format"]

    def test_framer_falls_back_to_default_provider(self, config):
        params = collect_parameters({}, FRAMER, config)

        assert SigningParameter("provider", "fallback-agency") in params

    def test_framer_explicit_provider_wins(self, config):
        params = collect_parameters({"provider": "other"}, FRAMER, config)

        assert SigningParameter("provider", "other") in params
        assert SigningParameter("provider", "fallback-agency") not in params

    def test_values_are_stringified(self, config):
        params = collect_parameters({"limit": 25}, LISTINGS, config)

        assert SigningParameter("limit", "25") in params


class TestSign:
    """Tests for the full signed URL."""

    def test_query_contains_signature_fields(self, config):
        outcome = sign({"company": "acme", "limit": "10"}, LISTINGS, config, timestamp=TIMESTAMP)

        assert outcome.ok
        query = parse_qsl(urlsplit(outcome.value.url).query)
        assert [key for key, _ in query] == ["apikey", "company", "format", "limit", "timestamp", "hmac"]
        assert dict(query)["apikey"] == "public-key"
        assert dict(query)["format"] == "swissrets:2.7"
        assert dict(query)["timestamp"] == str(TIMESTAMP)
        assert dict(query)["hmac"] == outcome.value.digest

    def test_digest_matches_reference_computation(self, config):
        outcome = sign({"company": "acme"}, LISTINGS, config, timestamp=TIMESTAMP)

        expected = hashlib.sha256(
            f"companyacmeformatswissrets:2.7private-key{TIMESTAMP}".encode("utf-8")
        ).hexdigest()
        assert outcome.value.digest == expected

    def test_values_are_url_encoded(self, config):
        outcome = sign({"company": "müller & söhne"}, LISTINGS, config, timestamp=TIMESTAMP)

        assert "format=swissrets%3A2.7" in outcome.value.url
        assert "company=m%C3%BCller+%26+s%C3%B6hne" in outcome.value.url

    def test_url_starts_with_endpoint(self, config):
        outcome = sign({}, LISTINGS, config, timestamp=TIMESTAMP)

        assert outcome.value.url.startswith(f"{config.endpoint}?apikey=")

    def test_private_key_is_not_in_url(self, config):
        outcome = sign({}, LISTINGS, config, timestamp=TIMESTAMP)

        assert "private-key" not in outcome.value.url

    def test_missing_private_key_fails(self):
        config = GatewayConfig(api_key="public-key", private_key="", endpoint="https://x.test")

        outcome = sign({}, LISTINGS, config)

        assert not outcome.ok
        assert isinstance(outcome.error, ConfigurationError)
        assert outcome.error.missing == ["CASAGATEWAY_PRIVATE_KEY"]
        assert "public-key" not in outcome.error.message

    def test_missing_both_keys_names_both(self):
        config = GatewayConfig(api_key="", private_key="", endpoint="https://x.test")

        outcome = sign({}, LISTINGS, config)

        assert outcome.error.missing == ["CASAGATEWAY_PRIVATE_KEY", "CASAGATEWAY_API_KEY"]
