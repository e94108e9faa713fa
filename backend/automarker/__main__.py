import logging

import uvicorn

from .main import create_app
from .settings import Settings


def main() -> None:
	settings = Settings()
	logging.basicConfig(
		level=settings.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	app = create_app(settings)
	logging.getLogger("automarker").info(f"FEthink automarker running on port {settings.port}")
	uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
	main()
