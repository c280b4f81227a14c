from fastapi import APIRouter

from deedseal import __version__

router = APIRouter()


@router.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok", "version": __version__}
