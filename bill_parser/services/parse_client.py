import httpx
from loguru import logger
from pydantic import ValidationError
from ..core.config import settings
from ..core.errors import ParseFailed, TransportFault
from .parse_types import ParsedBill

# Client for the external /api/parse-bill service. It does the OCR; we only
# send the image and check the shape of what comes back.


class ParseBillClient:
    def __init__(self, url: str | None = None, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url or settings.parse_bill_url
        self.timeout = timeout if timeout is not None else settings.parse_timeout_seconds
        self._transport = transport

    async def parse(self, filename: str, content_type: str, data: bytes) -> ParsedBill:
        """
        POST the image as multipart field 'file' and return the parsed bill.

        Raises:
            TransportFault: the service could not be reached
            ParseFailed: non-2xx status, or a body that is not {items, total?}
        """
        files = {"file": (filename, data, content_type)}
        logger.info("Sending bill image to parse service", url=self.url, filename=filename, size_bytes=len(data))

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(self.url, files=files)
        except httpx.TransportError as e:
            logger.error(f"Parse service unreachable: {type(e).__name__}: {e}")
            raise TransportFault()
        except httpx.HTTPError as e:
            # Redirect loops, undecodable content encodings and the like
            logger.error(f"Parse service call failed: {type(e).__name__}: {e}")
            raise TransportFault()

        try:
            body = r.json()
        except ValueError:
            body = None

        if not r.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning("Parse service returned an error", http_status=r.status_code, error=message)
            raise ParseFailed(message if isinstance(message, str) and message else None)

        if not isinstance(body, dict):
            logger.warning("Parse service returned a non-object body", http_status=r.status_code)
            raise ParseFailed()

        try:
            parsed = ParsedBill.model_validate(body)
        except ValidationError as e:
            logger.warning("Parse service response has the wrong shape", errors=e.error_count())
            message = body.get("error")
            raise ParseFailed(message if isinstance(message, str) and message else None)

        logger.info("Bill parsed", items=len(parsed.items), total=parsed.total)
        return parsed


def get_parse_client() -> ParseBillClient:
    return ParseBillClient()
