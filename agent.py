import logging
import os
import requests
from typing import Dict, Any

from google.adk.agents import LlmAgent

logger = logging.getLogger(__name__)

# Endpoint of the deployed slide generation service
CLOUD_RUN_SERVICE_URL = os.getenv("CLOUD_RUN_SERVICE_URL", "https://your-cloud-run-service.run.app/generate_from_text/")
REQUEST_TIMEOUT_SECONDS = 300

def create_slides_from_text(
    text_input: str,
    content_density: str = "concise",
    target_audience: str = "casual",
    visual_style: str = "default",
) -> Dict[str, Any]:
    """
    Calls the backend service to turn document text into a Marp slide deck.

    Args:
        text_input: The document text to present.
        content_density: One of "concise", "balanced" or "comprehensive".
        target_audience: One of "casual", "educational", "specialized", "business" or "leadership".
        visual_style: Marp theme name, e.g. "default", "gaia" or "uncover".

    Returns:
        A dictionary containing the result from the backend service.
    """
    logger.info(f"Forwarding document to slide service: {text_input[:200]}...")

    payload = {
        "text": text_input,
        "contentDensity": content_density,
        "targetAudience": target_audience,
        "visualStyle": visual_style,
    }
    try:
        response = requests.post(CLOUD_RUN_SERVICE_URL, json=payload, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()  # Raise an exception for HTTP errors (4xx or 5xx)

        response_data = response.json()
        logger.info(f"Slide service generated {len(response_data.get('presentation', {}).get('slides', []))} slides")
        return response_data

    except requests.exceptions.RequestException as e:
        error_response = getattr(e, "response", None)
        error_detail = error_response.text if error_response is not None else str(e)
        status = error_response.status_code if error_response is not None else "N/A"
        logger.error(f"The slide service returned an error. Status: {status}. Detail: {error_detail}")
        return {"status": "error", "message": f"The slide service failed to process the request. Detail: {error_detail}"}


# Define the root agent that uses the service tool
root_agent = LlmAgent(
    name="slide_deck_agent",
    model="gemini-2.5-flash",
    description="Turns a document into a Marp slide deck via the slide generation service.",
    instruction="""
    You are a presentation creation assistant.
    When the user provides a document or text to turn into slides, you MUST call the `create_slides_from_text` tool.
    Pass the full document text as `text_input`. If the user asks for a level of detail, map it to
    `content_density` (concise, balanced, comprehensive); if they describe their audience, map it to
    `target_audience` (casual, educational, specialized, business, leadership); if they name a look, pass it as
    `visual_style` (default, gaia, uncover).
    After the tool call is finished, summarize the slide titles for the user and include the returned markdown.
    Do not try to write the slides yourself. Your only job is to call the tool.
    """,
    tools=[create_slides_from_text]
)
