from fastapi import APIRouter, Depends
from octane_nexus.modules.images.schemas import ImageRequest, ImageResponse
from octane_nexus.modules.images.service import ImageService

router = APIRouter(tags=["images"])


def get_image_service() -> ImageService:
    return ImageService()


@router.post("/generate-image", response_model=ImageResponse)
def generate_image(
    request: ImageRequest,
    service: ImageService = Depends(get_image_service)
):
    """Logo or banner image from a short description. Returns the hosted image URL."""
    return service.generate_image(request.prompt, request.style)
