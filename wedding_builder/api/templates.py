"""
Template catalogue endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict, List

from wedding_builder.core.dependencies import require_platform_admin
from wedding_builder.templates.registry import TemplateRegistry, get_template_registry

router = APIRouter(dependencies=[Depends(require_platform_admin)])


@router.get("/", response_model=List[Dict[str, Any]])
async def list_templates(registry: TemplateRegistry = Depends(get_template_registry)):
    """Registered templates with their released versions"""
    return [metadata.to_dict() for metadata in registry.list_templates()]


@router.get("/{template_id}", response_model=Dict[str, Any])
async def get_template(
    template_id: str,
    registry: TemplateRegistry = Depends(get_template_registry),
):
    metadata = registry.get_metadata(template_id)
    if metadata is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Template not found",
        )
    return metadata.to_dict()
