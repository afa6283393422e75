from typing import Optional

from fastapi import FastAPI
from reservation.bookings.router import router as bookings_router
from reservation.persistence.router import router as persistence_router
from reservation.system import ReservationSystem
from reservation.trains.router import router as trains_router


def create_app(system: Optional[ReservationSystem] = None) -> FastAPI:
    """Build the API around a reservation system (a fresh one loaded from disk by default)"""
    if system is None:
        system = ReservationSystem()
        system.load()
    config = system.config

    app = FastAPI(
        title=config.PROJECT_NAME,
        version="1.0.0",
        description="Railway ticket booking with waitlists and PNR lookup",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.system = system

    # Include routers
    app.include_router(
        trains_router,
        prefix=f"{config.API_V1_STR}/trains",
        tags=["Trains & Availability"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{config.API_V1_STR}/bookings",
        tags=["Booking & Cancellation"]
    )

    app.include_router(
        persistence_router,
        prefix=f"{config.API_V1_STR}/admin",
        tags=["Admin Data Files"]
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": config.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
