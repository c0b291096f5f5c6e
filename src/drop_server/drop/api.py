from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request

from drop_server.drop.auth import verify_secret
from drop_server.drop.model import SendResponse, UploadEntryVo
from drop_server.drop.pipeline import UploadPipeline
from drop_server.drop.validation import UploadRequest, read_payload

router = APIRouter(prefix="/api/drop")


def get_pipeline(request: Request) -> UploadPipeline:
    return request.app.state.pipeline


def _text_field(form: FormData, key: str) -> str | None:
    # present but empty stays "", absent is None
    value = form.get(key)
    return value if isinstance(value, str) else None


def _send_form(form: FormData, pipeline: UploadPipeline) -> SendResponse:
    data = form.get("data")
    payload = read_payload(data.file if isinstance(data, UploadFile) else None)
    request = UploadRequest(name=_text_field(form, "name"),
                            ttl=_text_field(form, "ttl"),
                            tags=_text_field(form, "tags"))
    return pipeline.upload(request, payload)


# multipart fields: data (file), name, ttl, tags. The form is parsed by hand so
# the secret is checked before any of the body is read.
@router.post("/send", response_model=SendResponse, dependencies=[Depends(verify_secret)])
async def send(request: Request, pipeline: UploadPipeline = Depends(get_pipeline)) -> SendResponse:
    form = await request.form()
    try:
        return await run_in_threadpool(_send_form, form, pipeline)
    finally:
        await form.close()


@router.get("/metadata/{code}", response_model=UploadEntryVo)
def get_metadata(code: str, pipeline: UploadPipeline = Depends(get_pipeline)) -> UploadEntryVo:
    return pipeline.store.lookup(code).to_vo()


@router.get("/recent")
def get_recent(pipeline: UploadPipeline = Depends(get_pipeline)) -> list[str]:
    return pipeline.store.recent
