import logging
import openai
from openai import OpenAI
from octane_nexus.config import settings
from octane_nexus.modules.images.schemas import ImageResponse
from fastapi import HTTPException
from typing import Optional

logger = logging.getLogger(__name__)

IMAGE_SIZE = "1024x1024"
IMAGE_QUALITY = "standard"

STYLE_TEMPLATES = {
    "logo": (
        "A high-quality professional vector logo of {prompt}, clean design, modern aesthetic, "
        "suitable for brand identity, vector art style, high resolution, professional quality"
    ),
    "banner": (
        "A high-quality professional channel banner of {prompt}, engaging design, modern aesthetic, "
        "suitable for social media header, wide format, high resolution, professional quality"
    ),
}


def polish_prompt(prompt: str, style: Optional[str]) -> str:
    """Wrap the user's prompt in the logo or banner template; unknown styles get the logo one"""
    template = STYLE_TEMPLATES.get(style or "logo", STYLE_TEMPLATES["logo"])
    return template.format(prompt=prompt)


class ImageService:
    """Brand asset generation through the OpenAI images API"""

    def __init__(self, client: Optional[OpenAI] = None):
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not settings.openai_api_key:
                raise HTTPException(status_code=500, detail="OpenAI API key is not configured")
            self._client = OpenAI(api_key=settings.openai_api_key)
        return self._client

    def generate_image(self, prompt: Optional[str], style: Optional[str]) -> ImageResponse:
        if not prompt or not prompt.strip():
            raise HTTPException(status_code=400, detail="Prompt is required and must be a string")

        try:
            response = self.client.images.generate(
                model=settings.openai_image_model,
                prompt=polish_prompt(prompt.strip(), style),
                size=IMAGE_SIZE,
                quality=IMAGE_QUALITY,
                n=1,
            )
        except HTTPException:
            raise
        except openai.AuthenticationError as e:
            logger.error(f"OpenAI rejected the API key: {e}")
            raise HTTPException(status_code=401, detail="Invalid API key")
        except openai.RateLimitError as e:
            logger.warning(f"OpenAI rate limit hit: {e}")
            raise HTTPException(status_code=429, detail="Rate limit exceeded. Please try again later.")
        except openai.OpenAIError as e:
            logger.error(f"OpenAI image generation failed: {e}")
            raise HTTPException(status_code=500, detail=str(e) or "Failed to generate image")

        image_url = response.data[0].url if response.data else None
        if not image_url:
            raise HTTPException(status_code=500, detail="Failed to generate image")
        return ImageResponse(url=image_url)
