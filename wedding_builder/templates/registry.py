"""
Registry of wedding templates and their versions

Templates are code, not CMS layouts. Each version lives in its own module
(`wedding_builder/templates/{template_id}/{version}.py`) exporting one `render`
callable, and is immutable once released: changes ship as a new version module
registered next to the old one. Registered versions cannot be replaced or
removed, so weddings pinned to a version keep rendering the same way.

Modules are imported on first use and memoized per (template_id, version).
"""

from dataclasses import dataclass, field
import importlib
from typing import Dict, List, Optional, Tuple

import structlog

from wedding_builder.templates.types import RenderComponent, TemplateMetadata

logger = structlog.get_logger(__name__)


class TemplateResolutionError(Exception):
    """A (template_id, version) pair cannot be rendered"""

    def __init__(self, template_id: str, version: str, message: str):
        self.template_id = template_id
        self.version = version
        super().__init__(message)


class TemplateNotFoundError(TemplateResolutionError):
    def __init__(self, template_id: str, version: str):
        super().__init__(template_id, version, f"Template not found: {template_id}")


class VersionNotFoundError(TemplateResolutionError):
    def __init__(self, template_id: str, version: str):
        super().__init__(template_id, version, f"Template version not found: {template_id}@{version}")


class TemplateLoadError(TemplateResolutionError):
    def __init__(self, template_id: str, version: str, reason: str):
        self.reason = reason
        super().__init__(template_id, version, f"Failed to load template: {template_id}@{version}: {reason}")


class TemplateVersionConflictError(ValueError):
    """Released versions cannot be re-registered"""


@dataclass
class _TemplateEntry:
    id: str
    name: str
    description: str
    thumbnail: Optional[str] = None
    versions: Dict[str, str] = field(default_factory=dict)     # version -> module path

    def metadata(self) -> TemplateMetadata:
        return TemplateMetadata(
            id=self.id,
            name=self.name,
            description=self.description,
            thumbnail=self.thumbnail,
            versions=list(self.versions),
        )


class TemplateRegistry:
    """Maps (template_id, version) to a lazily loaded render entry point"""

    def __init__(self):
        self._templates: Dict[str, _TemplateEntry] = {}
        self._loaded: Dict[Tuple[str, str], RenderComponent] = {}

    def add_template(
        self,
        template_id: str,
        name: str,
        description: str,
        thumbnail: Optional[str] = None,
    ) -> None:
        """Declare a template family; versions are registered separately"""
        if template_id in self._templates:
            raise TemplateVersionConflictError(f"Template already declared: {template_id}")
        self._templates[template_id] = _TemplateEntry(
            id=template_id, name=name, description=description, thumbnail=thumbnail
        )

    def register(self, template_id: str, version: str, module_path: str) -> None:
        """Register a released version; versions are kept in release order"""
        entry = self._templates.get(template_id)
        if entry is None:
            raise KeyError(f"Unknown template: {template_id}")
        if version in entry.versions:
            raise TemplateVersionConflictError(
                f"{template_id}@{version} is already released; ship changes as a new version"
            )
        entry.versions[version] = module_path
        logger.debug("Template version registered", template_id=template_id, version=version)

    def resolve(self, template_id: str, version: str) -> RenderComponent:
        """
        Return the render entry point for a template version.

        Raises TemplateNotFoundError, VersionNotFoundError or TemplateLoadError.
        Failed loads are not cached; the next call tries again.
        """
        key = (template_id, version)
        component = self._loaded.get(key)
        if component is not None:
            return component

        entry = self._templates.get(template_id)
        if entry is None:
            logger.error("Template not found", template_id=template_id)
            raise TemplateNotFoundError(template_id, version)

        module_path = entry.versions.get(version)
        if module_path is None:
            logger.error("Template version not found", template_id=template_id, version=version)
            raise VersionNotFoundError(template_id, version)

        try:
            module = importlib.import_module(module_path)
        except Exception as e:
            logger.error(
                "Failed to load template",
                template_id=template_id,
                version=version,
                module=module_path,
                error=str(e),
                exc_info=True,
            )
            raise TemplateLoadError(template_id, version, str(e)) from e

        component = getattr(module, "render", None)
        if not callable(component):
            logger.error("Template module has no render entry point", template_id=template_id, version=version)
            raise TemplateLoadError(template_id, version, "module does not export render()")

        # Idempotent: concurrent first loads store the same function object
        self._loaded.setdefault(key, component)
        return self._loaded[key]

    def list_templates(self) -> List[TemplateMetadata]:
        return [entry.metadata() for entry in self._templates.values()]

    def get_metadata(self, template_id: str) -> Optional[TemplateMetadata]:
        entry = self._templates.get(template_id)
        return entry.metadata() if entry else None

    def is_valid(self, template_id: str, version: str) -> bool:
        entry = self._templates.get(template_id)
        return entry is not None and version in entry.versions

    def latest_version(self, template_id: str) -> Optional[str]:
        entry = self._templates.get(template_id)
        if entry is None or not entry.versions:
            return None
        return list(entry.versions)[-1]


def build_default_registry() -> TemplateRegistry:
    """
    All released templates.

    To add a version: create `templates/{template_id}/{version}.py` with a
    `render(props)` function and register it below. Never edit a released one.
    """
    registry = TemplateRegistry()

    registry.add_template(
        "classic",
        name="Classic Elegance",
        description="A timeless, elegant design with clean typography and subtle animations.",
    )
    registry.register("classic", "v1", "wedding_builder.templates.classic.v1")
    registry.register("classic", "v2", "wedding_builder.templates.classic.v2")

    return registry


template_registry = build_default_registry()


def get_template_registry() -> TemplateRegistry:
    """Dependency returning the process-wide registry"""
    return template_registry
