import base64
from io import BytesIO
import logging
import os
from pathlib import Path
import sys

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from wine_lens.core import extract_with_metadata  # noqa: E402
from wine_lens.exceptions import AuthenticationError, ImageError, RateLimitError, SearchError  # noqa: E402
from wine_lens.matching.types import GuessMatch  # noqa: E402
from wine_lens.pipeline import MatchConfig, match_wines  # noqa: E402
from wine_lens.schema import GuessedWine  # noqa: E402
from wine_lens.search.base import BaseSearchClient  # noqa: E402
from wine_lens.search.vivino import VivinoSearchClient  # noqa: E402

app = FastAPI(title="wine-lens API", version="1.0.0")
logger = logging.getLogger(__name__)

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(8 * 1024 * 1024)))
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
MATCH_CONFIG = MatchConfig.from_env()

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


class IdentifyRequest(BaseModel):
    imageBase64: str


class IdentifyMetadata(BaseModel):
    provider: str | None = None
    model: str | None = None


class IdentifiedWine(BaseModel):
    guessed: GuessedWine
    match: GuessMatch


class IdentifyResponse(BaseModel):
    wines: list[IdentifiedWine] = Field(default_factory=list)
    metadata: IdentifyMetadata


def _build_search_client() -> BaseSearchClient:
    return VivinoSearchClient()


def _validate_payload_size(payload: bytes) -> None:
    if len(payload) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=413, detail="image too large")


def _validate_multipart_content_type(content_type: str | None) -> None:
    if not content_type:
        raise HTTPException(status_code=400, detail="image file is required")
    normalized = content_type.split(";")[0].strip().lower()
    if normalized not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=400, detail="unsupported image content type")


def _decode_base64_image(image_base64: str) -> bytes:
    value = image_base64.strip()
    if not value:
        raise HTTPException(status_code=400, detail="imageBase64 is required")

    # Support data URL format: data:image/jpeg;base64,<payload>
    if value.startswith("data:"):
        _, sep, value = value.partition(",")
        if not sep:
            raise HTTPException(status_code=400, detail="invalid imageBase64 data URL")

    try:
        payload = base64.b64decode(value, validate=True)
    except Exception as exc:
        raise HTTPException(status_code=400, detail="invalid imageBase64 encoding") from exc

    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    _validate_payload_size(payload)

    return payload


@app.post("/identify", response_model=IdentifyResponse)
async def identify(request: Request, image: UploadFile | None = File(default=None)) -> IdentifyResponse:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = IdentifyRequest.model_validate(await request.json())
        except Exception as exc:
            raise HTTPException(status_code=400, detail="imageBase64 is required in JSON body") from exc
        payload = _decode_base64_image(body.imageBase64)
    else:
        if image is None:
            raise HTTPException(status_code=400, detail="image file is required")
        _validate_multipart_content_type(image.content_type)
        payload = await image.read()
        if not payload:
            raise HTTPException(status_code=400, detail="empty file")
        _validate_payload_size(payload)

    try:
        pil_image = Image.open(BytesIO(payload))
        guesses, extraction_metadata = extract_with_metadata(pil_image)
        matches, _ = match_wines(
            guesses,
            search_client=_build_search_client(),
            config=MATCH_CONFIG,
        )
        return IdentifyResponse(
            wines=[
                IdentifiedWine(guessed=guess, match=match)
                for guess, match in zip(guesses, matches)
            ],
            metadata=IdentifyMetadata(
                provider=extraction_metadata.get("provider"),
                model=extraction_metadata.get("model"),
            ),
        )
    except UnidentifiedImageError as exc:
        raise HTTPException(status_code=400, detail="invalid image format") from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except ImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SearchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("identify failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc
