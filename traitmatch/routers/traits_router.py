from typing import Dict, List

from fastapi import APIRouter, HTTPException, status

from traitmatch.schemas.trait import (
    TraitCategory,
    TraitLibrarySchema,
    TraitSchema,
    TraitValidationResponse,
)
from traitmatch.services.trait_library_service import trait_library_service

router = APIRouter(prefix="/traits", tags=["traits"])


@router.get("", response_model=TraitLibrarySchema, summary="The official trait library")
async def get_library() -> TraitLibrarySchema:
    return trait_library_service.get_trait_library()


@router.get("/category/{category}", response_model=List[TraitSchema])
async def get_traits_by_category(category: TraitCategory) -> List[TraitSchema]:
    return trait_library_service.get_traits_by_category(category)


@router.post(
    "/validate",
    response_model=TraitValidationResponse,
    summary="Validate a trait map",
    description="Reports unknown trait ids and values outside each trait's range.",
)
async def validate_traits(traits: Dict[str, int]) -> TraitValidationResponse:
    errors = trait_library_service.validate_trait_map(traits)
    return TraitValidationResponse(valid=not errors, errors=errors)


@router.get("/{trait_id}", response_model=TraitSchema)
async def get_trait(trait_id: str) -> TraitSchema:
    trait = trait_library_service.get_trait_by_id(trait_id)
    if trait is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trait not found")
    return trait
