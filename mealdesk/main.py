import logging

import uvicorn
from mealdesk.api.api_run import app
from mealdesk.utilities.config import API_BASE_URL, APP_HOST, APP_PORT, DEBUG


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Meal Desk running on http://{APP_HOST}:{APP_PORT} (backend: {API_BASE_URL})")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
