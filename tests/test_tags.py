from unittest.mock import patch

import httpx
import pytest

from takeout.exceptions import TagResolutionError
from takeout.tags import DockerHubTags, TagResolver


def hub_client(handler):
    return httpx.Client(base_url="https://hub.test", transport=httpx.MockTransport(handler))


def tags_payload(*names):
    return {"count": len(names), "results": [{"name": name} for name in names]}


class TestTagResolver:
    """Tests for latest-tag resolution."""

    def test_latest_queries_registry(self, mysql_service, resolver, registry):
        assert resolver.resolve(mysql_service, "latest") == "8.0.36"
        assert registry.calls == 1

    def test_explicit_tag_passes_through(self, mysql_service, resolver, registry):
        assert resolver.resolve(mysql_service, "8.0") == "8.0"
        assert resolver.resolve(mysql_service, "does-not-exist") == "does-not-exist"
        assert registry.calls == 0

    def test_registry_failure_propagates(self, mysql_service, registry):
        registry.error = TagResolutionError("hub down")
        resolver = TagResolver(registry_factory=lambda service: registry)

        with pytest.raises(TagResolutionError):
            resolver.resolve(mysql_service, "latest")

    def test_registry_is_scoped_to_service(self, mysql_service, registry):
        seen = []

        def factory(service):
            seen.append(service.image_name)
            return registry

        TagResolver(registry_factory=factory).resolve(mysql_service, "latest")
        assert seen == ["mysql"]


class TestDockerHubTags:
    """Tests for the Docker Hub tag registry."""

    def test_picks_highest_numeric_tag(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=tags_payload("latest", "8.0.9", "8.0.36", "8.0.36-debian", "8", "oracle"))

        tags = DockerHubTags("library", "mysql", client=hub_client(handler))

        assert tags.get_latest_tag() == "8.0.36"
        assert requests[0].url.path == "/v2/repositories/library/mysql/tags"
        assert "page_size" in requests[0].url.params

    def test_accepts_v_prefixed_tags(self):
        client = hub_client(lambda request: httpx.Response(200, json=tags_payload("v1.6.2", "v1.10.0", "latest")))
        assert DockerHubTags("getmeili", "meilisearch", client=client).get_latest_tag() == "v1.10.0"

    def test_http_error_raises_resolution_error(self):
        client = hub_client(lambda request: httpx.Response(503))
        with pytest.raises(TagResolutionError):
            DockerHubTags("library", "mysql", client=client).get_latest_tag()

    def test_no_versioned_tags_raises_resolution_error(self):
        client = hub_client(lambda request: httpx.Response(200, json=tags_payload("latest", "edge")))
        with pytest.raises(TagResolutionError):
            DockerHubTags("library", "redis", client=client).get_latest_tag()

    def test_for_service_uses_organization_and_image(self, mysql_service):
        tags = DockerHubTags.for_service(mysql_service)
        assert (tags.organization, tags.image_name) == ("library", "mysql")


class TestRegistryClientLifetime:
    """Tests for closing the HTTP client the registry opens itself."""

    def test_own_client_is_closed_after_lookup(self, mysql_service):
        opened = []
        real_client = httpx.Client

        def client_factory(**kwargs):
            kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, json=tags_payload("8.0.36")))
            client = real_client(**kwargs)
            opened.append(client)
            return client

        with patch("takeout.tags.httpx.Client", side_effect=client_factory):
            assert TagResolver().resolve(mysql_service, "latest") == "8.0.36"

        assert len(opened) == 1
        assert opened[0].is_closed

    def test_own_client_is_closed_on_error(self):
        opened = []
        real_client = httpx.Client

        def client_factory(**kwargs):
            kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(500))
            client = real_client(**kwargs)
            opened.append(client)
            return client

        with patch("takeout.tags.httpx.Client", side_effect=client_factory):
            with pytest.raises(TagResolutionError):
                DockerHubTags("library", "mysql").get_latest_tag()

        assert opened[0].is_closed

    def test_injected_client_is_left_open(self):
        client = hub_client(lambda request: httpx.Response(200, json=tags_payload("7.2.4")))

        DockerHubTags("library", "redis", client=client).get_latest_tag()

        assert not client.is_closed


class TestUnexpectedListings:
    """Tests for registry payloads that are valid JSON but the wrong shape."""

    @pytest.mark.parametrize(
        "payload",
        [
            ["8.0"],
            {"results": "8.0"},
            {"count": 0},
            "8.0",
        ],
        ids=["list", "results-not-list", "no-results", "string"],
    )
    def test_wrong_shape_raises_resolution_error(self, payload):
        client = hub_client(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(TagResolutionError):
            DockerHubTags("library", "mysql", client=client).get_latest_tag()

    def test_malformed_entries_are_skipped(self):
        payload = {"results": ["8.0", {"name": 8}, {"other": "x"}, {"name": "8.0.36"}]}
        client = hub_client(lambda request: httpx.Response(200, json=payload))

        assert DockerHubTags("library", "mysql", client=client).get_latest_tag() == "8.0.36"

    def test_unexpected_registry_exception_becomes_resolution_error(self, mysql_service, registry):
        registry.error = AttributeError("boom")
        resolver = TagResolver(registry_factory=lambda service: registry)

        with pytest.raises(TagResolutionError):
            resolver.resolve(mysql_service, "latest")
