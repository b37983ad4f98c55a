from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from metalbid.core.config import settings
from metalbid.middleware.request_id import RequestIDMiddleware
from metalbid.auctions.endpoints import router as auctions_router

app = FastAPI(title="metalbid")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*']
)
app.add_middleware(RequestIDMiddleware)

app.include_router(auctions_router)
