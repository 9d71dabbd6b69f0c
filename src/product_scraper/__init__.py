"""Search-page product scraper exposed over HTTP."""
