from dotenv import load_dotenv
load_dotenv()

import uvicorn

from core.config import settings

if __name__ == '__main__':
    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
