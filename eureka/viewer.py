# viewer.py
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pathlib import Path

from eureka.assistant import router as assistant_router
from eureka.config import LLM_MODELS, get_requested_model, model_chain
from eureka.prompts.loader import list_available_templates
from eureka.registration import router as registration_router

STATIC_DIR = Path(__file__).parent / "static"

# --- Initialize and configure FastAPI ---
app = FastAPI(title="Eureka Idea Assistant")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(assistant_router)
app.include_router(registration_router)

# Mount static folder
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(STATIC_DIR / "html"))


# --------------------------------------------------
# Routes
# --------------------------------------------------

@app.get("/")
def serve_index(request: Request):
    """Serves the landing page with the idea assistant chat"""
    return templates.TemplateResponse(request, "index.html", {"model": get_requested_model()})


@app.get("/api/models")
async def get_models():
    """Configured models, in the order they are tried"""
    return JSONResponse({
        "models": LLM_MODELS,
        "default": get_requested_model(),
        "chain": model_chain(),
    })


@app.get("/api/templates")
async def get_templates():
    """Available assistant prompt templates"""
    try:
        return JSONResponse({"status": "success", "templates": list_available_templates()})
    except Exception as e:
        return JSONResponse({"status": "error", "message": str(e)}, status_code=500)


if __name__ == "__main__":
    uvicorn.run("eureka.viewer:app", host="127.0.0.1", port=8000, reload=True)
