import uvicorn
from config import ApplicationConfig
from src.api.app import create_render_app

app = create_render_app(ApplicationConfig)

if __name__ == "__main__":
    uvicorn.run(
        "render_server:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.RENDER_SERVICE_PORT,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
