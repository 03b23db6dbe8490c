#!/usr/bin/env python3
"""
fieldlog quickstart.

Usage:
    FIELDLOG_FORMATTER=json python examples/quickstart.py
"""

from fieldlog import EncodingError, FieldSet, LoggerSettings, new_logger


def main() -> None:
    log = new_logger(LoggerSettings.from_env())
    log.put_fields(FieldSet(service="quickstart"))
    log.info("starting")

    for job in ("resize", "upload"):
        job_log = log.with_fields(job=job)
        job_log.debugf("running %s", job)

    try:
        log.with_fields(conn=object()).info("not JSON encodable")
    except EncodingError as exc:
        log.errorf("entry dropped: %s", exc.message)

    log.info("done")


if __name__ == "__main__":
    main()
