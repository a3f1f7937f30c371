"""Main entry point for running rasterpix as a module."""
import logging
import sys
from typing_extensions import override

from .main import main


class IndentMultiline(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord):
        s = super().format(record)
        head, *rest = s.splitlines()
        if rest:
            rest = ["    " + line for line in rest]
            return "\n".join([head, *rest])
        return s


fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
handler = logging.StreamHandler(sys.stderr)
handler.setFormatter(IndentMultiline(fmt))
logger = logging.getLogger()
logger.setLevel(logging.INFO)
logger.addHandler(handler)


if __name__ == "__main__":
    main()
