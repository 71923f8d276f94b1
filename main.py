import os
from datetime import datetime
from typing import Optional, Literal

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

# Local imports
import marp_renderer
import ppt_generator
from marp_generator import to_marp_markdown
from models import (
    AUDIENCE_OPTIONS,
    AVAILABLE_STYLES,
    DENSITY_OPTIONS,
    ContentDensity,
    Presentation,
    Slide,
    TargetAudience,
    TransformOptions,
)
from prompt_builder import build_transformation_prompt
from slide_parser import extract_markdown, parse_presentation, resolve_title

# Google Cloud clients
from google.cloud import storage
from google import genai
from google.genai import types
from google.auth import default


# Logging configuration
import logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

# --- Configuration ---
BUCKET_NAME = os.getenv("GCS_BUCKET_NAME", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GENERATION_TEMPERATURE = 0.4
MAX_OUTPUT_TOKENS = 4096

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "html": "text/html",
    "pptx": ppt_generator.PPTX_CONTENT_TYPE,
}

# --- Pydantic Models for API ---
class GeneratePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    content_density: ContentDensity = Field(default=ContentDensity.CONCISE, alias="contentDensity")
    target_audience: TargetAudience = Field(default=TargetAudience.CASUAL, alias="targetAudience")
    visual_style: str = Field(default="default", alias="visualStyle")

    def options(self) -> TransformOptions:
        return TransformOptions(
            content_density=self.content_density,
            target_audience=self.target_audience,
            visual_style=self.visual_style,
        )

class RenderPayload(BaseModel):
    markdown: Optional[str] = None
    theme: str = "default"
    format: Literal["pdf", "html", "pptx"]
    # Needed for pptx, which is drawn from the slide model rather than the markup
    presentation: Optional[Presentation] = None
    upload: bool = False

# --- FastAPI App ---
app = FastAPI(
    title="Slide Generation Service",
    description="Turns document text into Marp slide decks and renders them to PDF, HTML or PPTX.",
    version="1.0.0"
)

def is_demo_mode() -> bool:
    """Generation needs a Google Cloud project; without one the service answers with demo content."""
    return not os.getenv("GOOGLE_CLOUD_PROJECT")

# --- Helper Functions ---
def generate_slide_markdown(text_input: str, options: TransformOptions) -> str:
    """Calls Gemini on Vertex AI and returns the Marp markdown it produced."""
    project_id = os.getenv("GOOGLE_CLOUD_PROJECT")
    location = os.getenv("GOOGLE_CLOUD_LOCATION", "us-central1")

    logging.info(f"Initializing Vertex AI for project '{project_id}' in '{location}'...")
    try:
        # Explicitly request the cloud-platform scope to call Vertex AI
        credentials, _ = default(
            scopes=['https://www.googleapis.com/auth/cloud-platform']
        )
        client = genai.Client(vertexai=True, project=project_id, location=location, credentials=credentials)
    except Exception as e:
        logging.error(f"Failed to initialize Vertex AI client: {e}", exc_info=True)
        raise

    prompt = build_transformation_prompt(options)

    logging.info("Calling LLM to generate slide markdown...")
    try:
        response = client.models.generate_content(
            model=GEMINI_MODEL,
            contents=[prompt, f"Here is the document to turn into slides:\n---\n{text_input}\n---"],
            config=types.GenerateContentConfig(
                temperature=GENERATION_TEMPERATURE,
                max_output_tokens=MAX_OUTPUT_TOKENS,
            ),
        )
        llm_output_text = response.text
        logging.debug(f"Received raw response from LLM: {llm_output_text}")
    except Exception as e:
        logging.error(f"LLM call failed: {e}", exc_info=True)
        raise

    markdown = extract_markdown(llm_output_text or "")
    if not markdown:
        raise ValueError("Failed to generate presentation markdown")
    return markdown

def build_demo_presentation(source_text: str, options: TransformOptions) -> Presentation:
    """Builds a placeholder presentation without calling the model."""
    return Presentation(
        title=resolve_title("", source_text),
        slides=[
            Slide(title="Demo", content=["Generated in demo mode: no Google Cloud project is configured."]),
            Slide(title="Your Document", content=[
                f"{len(source_text.split())} words received",
                f"Content density: {options.content_density.value}",
                f"Target audience: {options.target_audience.value}",
                f"Visual style: {options.visual_style}",
            ]),
            Slide(title="Next Steps", content=[
                "Set GOOGLE_CLOUD_PROJECT to generate real slides",
                "Render the markdown to PDF, HTML or PPTX",
            ]),
        ],
    )

def upload_to_gcs(data: bytes, fmt: str, title: str) -> str:
    """Uploads a rendered file to GCS and returns its public URL."""
    storage_client = storage.Client()
    bucket = storage_client.bucket(BUCKET_NAME)

    safe_title = "".join(c for c in title if c.isalnum() or c in (' ', '_')).rstrip()
    if not safe_title:
        safe_title = "Untitled_Presentation"
    file_name = f"{safe_title.replace(' ', '_')}_{datetime.now().strftime('%Y%m%d%H%M%S')}.{fmt}"

    blob = bucket.blob(file_name)
    logging.info(f"Uploading presentation to gs://{BUCKET_NAME}/{file_name}")
    blob.upload_from_string(data, content_type=CONTENT_TYPES[fmt])
    logging.info(f"File uploaded. Public URL: {blob.public_url}")
    return blob.public_url

# --- Endpoints --- #
@app.post("/generate_from_text/", summary="Generate a slide deck from document text")
async def generate_from_text_endpoint(payload: GeneratePayload):
    """Turns document text into a Presentation and its Marp markdown."""
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="No document text provided")

    options = payload.options()
    logging.info(f"Generating slides for {len(payload.text)} characters with options: {options.model_dump()}")

    if is_demo_mode():
        logging.warning("GOOGLE_CLOUD_PROJECT is not set. Running in demo mode.")
        presentation = build_demo_presentation(payload.text, options)
        return {
            "status": "success",
            "demoMode": True,
            "presentation": presentation.model_dump(),
            "markdown": to_marp_markdown(presentation, options.visual_style),
            "message": "Demo mode: no real presentation was generated because no Google Cloud project is configured.",
        }

    try:
        raw_markdown = generate_slide_markdown(payload.text, options)
        presentation = parse_presentation(raw_markdown, payload.text)
    except Exception as e:
        logging.error(f"An error occurred in the generation process: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "status": "success",
        "demoMode": False,
        "presentation": presentation.model_dump(),
        "markdown": to_marp_markdown(presentation, options.visual_style),
        "message": f"Generated {len(presentation.slides)} slides.",
    }

@app.post("/render/", summary="Render slides to PDF, HTML or PPTX")
async def render_endpoint(payload: RenderPayload):
    """Renders Marp markdown (or, for pptx, the slide model) and returns or uploads the file."""
    if payload.format == "pptx":
        if payload.presentation is None:
            raise HTTPException(status_code=400, detail="A presentation is required for pptx output")
    elif not payload.markdown:
        raise HTTPException(status_code=400, detail="No markdown content provided")

    try:
        if payload.format == "pptx":
            data = ppt_generator.to_pptx_bytes(payload.presentation)
        else:
            data = marp_renderer.render(payload.markdown, payload.theme or "default", payload.format)
    except marp_renderer.MarpRenderError as e:
        logging.error(f"Error rendering presentation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    if payload.upload and BUCKET_NAME:
        title = payload.presentation.title if payload.presentation else "presentation"
        try:
            file_url = upload_to_gcs(data, payload.format, title)
        except Exception as e:
            logging.error(f"Upload failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "success", "file_url": file_url}

    return Response(
        content=data,
        media_type=CONTENT_TYPES[payload.format],
        headers={"Content-Disposition": f'attachment; filename="presentation.{payload.format}"'},
    )

@app.get("/styles/")
async def styles():
    return {
        "styles": [s.model_dump() for s in AVAILABLE_STYLES],
        "densities": DENSITY_OPTIONS,
        "audiences": AUDIENCE_OPTIONS,
    }

@app.get("/")
async def root():
    return {"message": "Slide Generation API is running."}
