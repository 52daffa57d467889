# io/query_logging.py
import json
import logging
import sys

from taxi_park.analytics.hooks import NoopHooks
from taxi_park.io.recorder import QueryRecord, Recorder, to_jsonable


def _default_json_logger(name="taxi_park", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _summarize(result):
    # sets are logged by size only; members go to the recorder
    if isinstance(result, (set, frozenset)):
        return {"size": len(result)}
    return {"value": to_jsonable(result)}


class QueryLogging(NoopHooks):
    """
    Structured JSON logs for every query evaluation, plus forwarding of the
    results to an optional Recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0
        self._params: dict[str, dict] = {}

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def query_start(self, name: str, **params):
        self._params[name] = params
        if self.debug:
            shaped = {k: to_jsonable(v) for k, v in params.items()}
            self._emit("DEBUG", "query_start", query=name, **shaped)

    def query_end(self, name: str, *, result, ms: float):
        self._seq += 1
        params = self._params.pop(name, {})
        self._emit(
            "INFO", "query_end", query=name, seq=self._seq, ms=round(ms, 3), **_summarize(result)
        )
        if self.recorder:
            self.recorder.emit(
                QueryRecord(
                    run_id=self.run_id,
                    seq=self._seq,
                    name=name,
                    params=params,
                    result=result,
                    ms=ms,
                )
            )

    def error(self, name: str, *, exc: BaseException, **extra):
        self._params.pop(name, None)
        self._emit("ERROR", "query_error", query=name, error=str(exc), **extra)
