import logging

from invoice_generator.core.services.settings import load_settings
from invoice_generator.ui.layouts.main_window import MainWindow


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    app = MainWindow(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
