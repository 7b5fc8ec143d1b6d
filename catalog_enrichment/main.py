import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from catalog_enrichment.api.routes import router
from catalog_enrichment.core.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)

app = FastAPI(
    title="Catalog Enrichment API",
    version="1.0.0",
    description="Enriches catalog products into structured, SEO-ready metadata using text and vision AI services",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "catalog_enrichment.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
