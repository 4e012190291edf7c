from fastapi import APIRouter, Depends, HTTPException, Query

from faqih.dependencies import get_dataset
from faqih.models.schemas import Fatwa, FatwaListResponse, SearchHit, SearchResponse
from faqih.services.dataset import find_fatwa
from faqih.services.selector import rank

router = APIRouter(tags=["fatwas"])


@router.get("/fatwas", response_model=FatwaListResponse)
async def list_fatwas(
    category: str | None = None,
    verdict: str | None = None,
    fatwas: tuple[Fatwa, ...] = Depends(get_dataset),
):
    """List fatwas in dataset order, optionally filtered by category and verdict."""
    selected = [
        f for f in fatwas
        if (category is None or f.category == category)
        and (verdict is None or f.verdict == verdict)
    ]
    return FatwaListResponse(fatwas=selected)


@router.get("/fatwas/{fatwa_id}", response_model=Fatwa)
async def get_fatwa(fatwa_id: str, fatwas: tuple[Fatwa, ...] = Depends(get_dataset)):
    fatwa = find_fatwa(fatwas, fatwa_id)
    if fatwa is None:
        raise HTTPException(status_code=404, detail="Fatwa not found")
    return fatwa


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query(..., min_length=1, max_length=500),
    fatwas: tuple[Fatwa, ...] = Depends(get_dataset),
):
    """Rank fatwas for ``q`` without touching any chat session."""
    hits = rank(q, fatwas)
    return SearchResponse(
        query=q,
        results=[SearchHit(fatwa=f, score=s) for f, s in hits],
    )
