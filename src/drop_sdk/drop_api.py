import io

import requests
from pydantic import BaseModel

from drop_sdk.common import check_response
from drop_server.drop.auth import SECRET_KEY_HEADER
from drop_server.drop.model import SendResponse, UploadEntryVo


class DropClient(BaseModel):
    endpoint: str
    secret_key: str = ''

    def __init__(self, endpoint: str, secret_key: str = ''):
        super().__init__(endpoint=endpoint, secret_key=secret_key)

    @property
    def url_prefix(self):
        return self.endpoint + '/api/drop'

    @property
    def headers(self) -> dict[str, str]:
        return {SECRET_KEY_HEADER: self.secret_key} if self.secret_key else {}

    def send(self,
             file_name: str,
             content: bytes,
             ttl: str | None = None,
             tags: list[str] | None = None) -> SendResponse:
        data = {"name": file_name}
        if ttl:
            data["ttl"] = ttl
        if tags:
            data["tags"] = ','.join(tags)
        response = requests.post(f"{self.url_prefix}/send",
                                 headers=self.headers,
                                 data=data,
                                 files={"data": (file_name, io.BytesIO(content))})
        check_response(response)
        return SendResponse(**response.json())

    def get_metadata(self, code: str) -> UploadEntryVo:
        response = requests.get(f"{self.url_prefix}/metadata/{code}")
        check_response(response)
        return UploadEntryVo(**response.json())

    def recent(self) -> list[str]:
        response = requests.get(f"{self.url_prefix}/recent")
        check_response(response)
        return response.json()
