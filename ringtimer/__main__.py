"""Allow running RingTimer as a module: python -m ringtimer."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import RingTimerApp


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("RINGTIMER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("RingTimer")
    app.setOrganizationName("RingTimer")

    window = RingTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
