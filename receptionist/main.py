# receptionist/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from receptionist.config import get_settings
from receptionist.api.routes import router as api_router


logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Clinic Receptionist API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # for dev; tighten in prod
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.get("/")
def root():
    return {"message": "Clinic Receptionist API is running"}


app.include_router(api_router, prefix="/api")
