"""ba_nft REST endpoints.

POST /nfts                  — create (multipart, auth)
GET  /nfts                  — browse with category filter + pagination
GET  /nfts/meta/categories  — fixed category list
GET  /nfts/{nft_id}         — detail
GET  /nfts/{nft_id}/history — created + sale events
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from src.ba_common.enums import NFTSort
from src.ba_common.errors import FileTooLargeError
from src.ba_common.response import ApiResponse, success_response
from src.ba_gateway.auth.dependencies import get_current_address
from src.ba_nft.application.service import ImageUpload, NFTApplicationService
from src.container import get_nft_service

router = APIRouter(prefix="/nfts", tags=["nfts"])

NFTService = Annotated[NFTApplicationService, Depends(get_nft_service)]


async def read_image_upload(image_file: UploadFile, limit: int) -> ImageUpload:
    """Read at most limit + 1 bytes; anything longer is rejected with 413."""
    if image_file.size is not None and image_file.size > limit:
        raise FileTooLargeError(image_file.size, limit)
    content = await image_file.read(limit + 1)
    if len(content) > limit:
        raise FileTooLargeError(len(content), limit)
    return ImageUpload(
        content=content,
        filename=image_file.filename or "upload",
        content_type=image_file.content_type,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_nft(
    request: Request,
    address: Annotated[str, Depends(get_current_address)],
    service: NFTService,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    royalty_percentage: Annotated[str | None, Form(alias="royaltyPercentage")] = None,
    image_file: Annotated[UploadFile | None, File(alias="imageFile")] = None,
) -> ApiResponse:
    image = None
    if image_file is not None:
        image = await read_image_upload(image_file, service.max_upload_bytes)
    result = await service.create_nft(
        address, name, description, category, royalty_percentage, image
    )
    resp = success_response(result.to_wire(), message="NFT created")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_nfts(
    request: Request,
    service: NFTService,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: str | None = Query(None),
    sort_by: NFTSort = Query(NFTSort.CREATED_AT, alias="sortBy"),
) -> ApiResponse:
    result = await service.list_nfts(page, limit, category, sort_by)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


# Declared before /{nft_id} so "meta" is not parsed as an id.
@router.get("/meta/categories")
async def list_categories(request: Request) -> ApiResponse:
    resp = success_response(NFTApplicationService.categories().to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{nft_id}")
async def get_nft(nft_id: int, request: Request, service: NFTService) -> ApiResponse:
    result = await service.get_nft(nft_id)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{nft_id}/history")
async def get_history(nft_id: int, request: Request, service: NFTService) -> ApiResponse:
    result = await service.history(nft_id)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
