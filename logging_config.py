import logging
import sys

_LINE_FMT = (
    '{"level":"%(levelname)s","ts":"%(asctime)s",'
    '"name":"%(name)s","msg":"%(message)s"}'
)


def setup_logging(level="INFO"):
    root = logging.getLogger()
    root.setLevel(str(level).upper())

    # app factories may run more than once per process (tests)
    if any(getattr(h, "ledger_stdout", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LINE_FMT))
    handler.ledger_stdout = True
    root.addHandler(handler)
