"""
Meme Generator - FastAPI Application
"""

from fastapi import FastAPI, HTTPException, UploadFile, File, Form
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from pydantic import BaseModel, Field
from typing import Optional, List, Union
from pathlib import Path
from loguru import logger
from PIL import Image
import base64
import sys

from config import settings
from modules import Ingestor, Renderer, Exporter
from utils.exceptions import ImageLoadError, ImageSaveError
from utils.image_utils import decode_image

# Configure logging
logger.remove()
logger.add(sys.stderr, level="INFO")
logger.add(settings.LOGS_DIR / "app.log", rotation="500 MB", retention="10 days", level="DEBUG")


# Request/response models
class GenerateRequest(BaseModel):
    """Request model for meme generation from a URL"""
    image_url: str = Field(..., description="URL of the base image")
    top: str = Field("", description="Top caption (empty = no top banner)")
    bottom: str = Field("", description="Bottom caption (empty = no bottom banner)")
    return_base64: bool = Field(False, description="Return meme as base64 as well as a URL")


class GenerateResponse(BaseModel):
    """Response model for meme generation"""
    success: bool
    filename: Optional[str] = None
    meme_url: Optional[str] = None
    meme_base64: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    error: Optional[str] = None


class StatusResponse(BaseModel):
    """Status response model"""
    status: str
    message: str


# Pipeline class
class MemePipeline:
    """
    Complete meme generation pipeline: load, render, export
    """

    def __init__(self):
        """Initialize pipeline components"""
        self.ingestor = Ingestor()
        self.renderer = Renderer()
        self.exporter = Exporter()

        logger.info("Meme Pipeline initialized")

    def generate(self, source: Union[str, Path, Image.Image], top: str = "", bottom: str = "") -> Image.Image:
        """
        Render a meme

        Args:
            source: Base image, or a path/URL to load it from
            top: Top caption
            bottom: Bottom caption

        Returns:
            Rendered meme
        """
        image = source if isinstance(source, Image.Image) else self.ingestor.load(source)
        return self.renderer.render(image, top=top, bottom=bottom)

    def generate_and_save(self, source: Union[str, Path, Image.Image], top: str = "", bottom: str = "") -> dict:
        """
        Render a meme and store it in the output directory

        Returns:
            Result dictionary with the saved path and the meme itself
        """
        meme = self.generate(source, top=top, bottom=bottom)
        output_path = self.exporter.save_versioned(meme, top or bottom)

        return {
            'success': True,
            'path': output_path,
            'filename': output_path.name,
            'meme': meme,
        }


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="Caption images with top and bottom meme text",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global pipeline instance (fails at startup if the font cannot be loaded)
pipeline = MemePipeline()


# API Endpoints
@app.get("/health", response_model=StatusResponse)
async def health():
    """Health check endpoint"""
    return StatusResponse(
        status="healthy",
        message="All systems operational"
    )


@app.post("/generate")
async def generate_meme(
    file: UploadFile = File(..., description="Base image"),
    top: str = Form(""),
    bottom: str = Form(""),
):
    """
    Generate meme from an uploaded image

    Returns:
        Encoded meme image
    """
    data = await file.read()

    try:
        image = decode_image(data, source=file.filename or "upload")
    except ImageLoadError as e:
        logger.warning(f"Rejected upload: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    meme = pipeline.generate(image, top=top, bottom=bottom)

    return Response(
        content=pipeline.exporter.encode(meme),
        media_type=f"image/{pipeline.exporter.output_format}"
    )


@app.post("/api/generate", response_model=GenerateResponse, tags=["api"])
def generate_meme_from_url(request: GenerateRequest):
    """
    Generate meme from an image URL and store it

    Args:
        request: Generation request

    Returns:
        Generation result
    """
    try:
        result = pipeline.generate_and_save(request.image_url, top=request.top, bottom=request.bottom)
    except ImageLoadError as e:
        logger.warning(f"Could not load {request.image_url}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)
    except ImageSaveError as e:
        logger.error(f"Could not store meme: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)

    meme = result['meme']
    response = GenerateResponse(
        success=True,
        filename=result['filename'],
        meme_url=f"/meme/{result['filename']}",
        width=meme.width,
        height=meme.height,
    )

    if request.return_base64:
        response.meme_base64 = base64.b64encode(result['path'].read_bytes()).decode("ascii")

    return response


@app.get("/meme/{filename}")
async def get_meme(filename: str):
    """
    Get stored meme file

    Args:
        filename: Meme filename

    Returns:
        Image file
    """
    file_path = pipeline.exporter.output_dir / filename

    if Path(filename).name != filename or not file_path.is_file():
        raise HTTPException(status_code=404, detail="Meme not found")

    return FileResponse(
        file_path,
        media_type=f"image/{pipeline.exporter.output_format}",
        filename=filename
    )


@app.get("/memes", response_model=List[str])
async def list_memes():
    """
    List all stored memes

    Returns:
        List of meme filenames, newest first
    """
    return [path.name for path in pipeline.exporter.list_memes()]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True
    )
