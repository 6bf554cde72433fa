import logging

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from . import codec
from .errors import InvalidArgumentError
from .filters import SqlFilter
from .models import (
    ConnectionStringRecord,
    HealthResponse,
    ParseRequest,
    ParseResponse,
    RecordView,
    SerializeRequest,
    SerializeResponse,
    SqlFilterRequest,
    SqlFilterResponse,
)
from .normalize import decode_text

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".env", ".conf")

app = FastAPI(
    title="sbconn",
    description="Service Bus connection string parsing and canonical serialization",
    version="0.1.0",
)


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    logger.info(
        "Rejected request: %s",
        exc.message,
        extra={"path": request.url.path, "param": exc.param_name},
    )
    return JSONResponse(status_code=422, content={"detail": exc.message, "param": exc.param_name})


def _parse_response(record: ConnectionStringRecord, decoding=None) -> ParseResponse:
    view = RecordView(**record.model_dump())
    return ParseResponse(record=view, connection_string=str(record), decoding=decoding)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/connection-string/parse", response_model=ParseResponse)
def parse_connection_string(body: ParseRequest):
    record = codec.parse(body.connection_string)
    return _parse_response(record)


@app.post("/connection-string/parse-file", response_model=ParseResponse)
async def parse_connection_string_file(file: UploadFile = File(...)):
    if not file.filename.lower().endswith(TEXT_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only .txt, .env or .conf files are supported")

    raw = await file.read()
    text, decoding = decode_text(raw)
    record = codec.parse(text)
    return _parse_response(record, decoding)


@app.post("/connection-string/serialize", response_model=SerializeResponse)
def serialize_connection_string(body: SerializeRequest, entity: bool = False):
    fields = body.model_dump(exclude_none=True)
    record = ConnectionStringRecord(**fields)
    if entity:
        return {"connection_string": record.entity_connection_string()}
    return {"connection_string": str(record)}


@app.post("/filters/sql", response_model=SqlFilterResponse)
def describe_sql_filter(body: SqlFilterRequest):
    sql_filter = SqlFilter(body.sql_expression, parameters=body.parameters)
    return {
        "sql_expression": sql_filter.sql_expression,
        "parameters": sql_filter.parameters,
        "description": str(sql_filter),
    }
