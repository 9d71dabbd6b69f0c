from __future__ import annotations

import argparse
import os

import uvicorn

from product_scraper.utils.log import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the product scraper API")
    parser.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "3000")))
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    args = parser.parse_args()

    # the app's startup hook configures logging again from the environment
    os.environ["LOG_LEVEL"] = args.log_level
    configure_logging(args.log_level)
    print(f"API available at http://localhost:{args.port}")
    print(f"Test with: http://localhost:{args.port}/api/scrape?keyword=smartphone")
    uvicorn.run("product_scraper.web.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
