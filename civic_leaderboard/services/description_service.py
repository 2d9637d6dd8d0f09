"""
DescriptionService - AI generated traffic report descriptions (Gemini REST API).

Failures raise DescriptionGenerationError instead of returning an empty
string, so the caller can switch to manual entry.
"""

import logging
from typing import Optional

import httpx

from civic_leaderboard.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

MAX_WORDS = 250

SECTIONS = (
    "INCIDENT TYPE",
    "LOCATION DETAILS",
    "TRAFFIC IMPACT",
    "SAFETY CONCERNS",
    "RECOMMENDATIONS",
)

SEVERITY_TEXT = {
    "high": "High severity - immediate attention required. Multiple vehicles or major obstruction affecting traffic flow.",
    "low": "Low severity - minor disruption or hazard, traffic flowing with minimal delays.",
    "medium": "Moderate severity - some delays expected, exercise caution.",
}


class DescriptionGenerationError(Exception):
    """Raised when no description could be generated."""
    pass


def build_prompt(report_type: str, location: str, severity: str, has_image: bool = False) -> str:
    """Prompt asking for the five-section report structure"""
    structure = "\n\n".join(f"{section}\n[...]" for section in SECTIONS)
    prompt = (
        "Generate a structured, professional traffic report description based on the "
        "following information:\n\n"
        f"Report Type: {report_type}\n"
        f"Location: {location}\n"
        f"Severity Level: {severity}\n\n"
        "Use clear headings in CAPS on separate lines, put the details below each "
        f"heading, keep an objective tone and use at most {MAX_WORDS} words.\n\n"
        f"Structure:\n{structure}"
    )
    if has_image:
        prompt += (
            "\n\nA photo has been uploaded with this report. Incorporate relevant "
            "details from the image into the description."
        )
    return prompt


def truncate_words(text: str, max_words: int = MAX_WORDS) -> str:
    words = text.split(" ")
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + "..."


def local_description(report_type: str, location: Optional[str], severity: str, has_photo: bool = False) -> str:
    """Deterministic template the user can start from when AI generation fails"""
    photo_note = " A photo was provided with this report." if has_photo else ""
    body = (
        report_type,
        location or "Location not specified",
        SEVERITY_TEXT.get(severity, SEVERITY_TEXT["medium"]),
        "Use caution when approaching the area. Follow traffic signs and any directions from authorities.",
        "Drivers should slow down, consider alternative routes, and avoid stopping in the affected lanes."
        + photo_note,
    )
    return "\n\n".join(f"{section}\n{text}" for section, text in zip(SECTIONS, body))


class DescriptionService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    async def generate_description(
        self,
        report_type: str,
        location: str,
        severity: str,
        image_base64: Optional[str] = None,
        image_mime_type: str = "image/jpeg",
    ) -> str:
        """
        Generate a description for a traffic report.

        Returns: text with at most 250 words
        Raises: DescriptionGenerationError on any failure
        """
        api_key = self.settings.gemini_api_key
        if not api_key:
            raise DescriptionGenerationError("Gemini API key is not configured")

        parts: list[dict] = [{"text": build_prompt(report_type, location, severity, bool(image_base64))}]
        if image_base64:
            parts.append({"inline_data": {"mime_type": image_mime_type, "data": image_base64}})

        url = GEMINI_API_URL.format(model=self.settings.gemini_model)

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.settings.description_timeout_seconds,
            ) as client:
                response = await client.post(
                    url,
                    params={"key": api_key},
                    json={"contents": [{"parts": parts}]},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Description generation failed: {e}")
            raise DescriptionGenerationError(f"AI service request failed: {e}") from e
        except ValueError as e:
            raise DescriptionGenerationError("AI service returned invalid JSON") from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise DescriptionGenerationError("Invalid response format from AI model") from e

        if not text or not text.strip():
            raise DescriptionGenerationError("AI model returned an empty description")

        return truncate_words(text.strip())
