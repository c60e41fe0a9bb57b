"""
Unit tests for the template registry
"""

import pytest

from wedding_builder.templates.registry import (
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateRegistry,
    TemplateResolutionError,
    TemplateVersionConflictError,
    VersionNotFoundError,
    build_default_registry,
)


@pytest.fixture
def registry() -> TemplateRegistry:
    return build_default_registry()


@pytest.mark.parametrize("version", ["v1", "v2"])
def test_registered_versions_resolve(registry, version):
    component = registry.resolve("classic", version)
    assert callable(component)


def test_resolve_is_memoized(registry):
    first = registry.resolve("classic", "v1")
    second = registry.resolve("classic", "v1")
    assert first is second


def test_unknown_template(registry):
    with pytest.raises(TemplateNotFoundError) as exc_info:
        registry.resolve("modern", "v1")
    assert exc_info.value.template_id == "modern"


def test_unknown_version(registry):
    with pytest.raises(VersionNotFoundError) as exc_info:
        registry.resolve("classic", "v99")
    assert exc_info.value.version == "v99"


@pytest.mark.parametrize("template_id,version", [("", ""), ("classic", ""), ("CLASSIC", "v1"), ("classic", "V1")])
def test_unregistered_pairs_raise_typed_errors(registry, template_id, version):
    with pytest.raises(TemplateResolutionError):
        registry.resolve(template_id, version)


def test_load_failure_is_typed_and_not_cached():
    registry = TemplateRegistry()
    registry.add_template("broken", name="Broken", description="Missing module")
    registry.register("broken", "v1", "wedding_builder.templates.broken.does_not_exist")

    with pytest.raises(TemplateLoadError):
        registry.resolve("broken", "v1")
    # A second attempt tries again instead of returning a cached failure
    with pytest.raises(TemplateLoadError):
        registry.resolve("broken", "v1")


def test_module_without_render_is_a_load_error():
    registry = TemplateRegistry()
    registry.add_template("bare", name="Bare", description="No entry point")
    registry.register("bare", "v1", "wedding_builder.templates.types")

    with pytest.raises(TemplateLoadError) as exc_info:
        registry.resolve("bare", "v1")
    assert "render" in exc_info.value.reason


def test_released_versions_cannot_be_replaced(registry):
    with pytest.raises(TemplateVersionConflictError):
        registry.register("classic", "v1", "wedding_builder.templates.classic.v2")
    # Still resolves to the original module
    assert registry.resolve("classic", "v1").__module__ == "wedding_builder.templates.classic.v1"


def test_register_requires_declared_template(registry):
    with pytest.raises(KeyError):
        registry.register("modern", "v1", "wedding_builder.templates.modern.v1")


def test_metadata(registry):
    metadata = registry.get_metadata("classic")
    assert metadata.name == "Classic Elegance"
    assert metadata.versions == ["v1", "v2"]
    assert registry.latest_version("classic") == "v2"
    assert registry.is_valid("classic", "v1")
    assert not registry.is_valid("classic", "v3")
    assert registry.get_metadata("modern") is None
    assert [t.id for t in registry.list_templates()] == ["classic"]


def test_templates_endpoint(client, admin_headers):
    response = client.get("/app/admin/templates/", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == [{
        "id": "classic",
        "name": "Classic Elegance",
        "description": "A timeless, elegant design with clean typography and subtle animations.",
        "thumbnail": None,
        "versions": ["v1", "v2"],
    }]


def test_templates_endpoint_requires_platform_admin(client, couple_headers):
    response = client.get("/app/admin/templates/", headers=couple_headers)
    assert response.status_code == 403
