"""
BountyQA - FastAPI Application

Main entry point for the bounty and reward-pool Q&A API.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from bountyqa.routers import questions, answers, wallet, leaderboard
from bountyqa.config import FEE_DENOMINATOR, TOKEN_DECIMALS, get_settings
from bountyqa.engine import get_platform
from bountyqa.exceptions import PlatformError
from bountyqa.models.ledger import PlatformConstants

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logger.info("BountyQA API starting up (fee %d bps)", settings.fee_bps)
    yield
    logger.info("BountyQA API shutting down")


app = FastAPI(
    title="BountyQA API",
    description="""
    Questions with money on them.
    
    ## Features
    - Bounty questions pay one answer picked by the asker
    - Pool questions split the reward among the top-voted answers after a deadline
    - Reputation rewards asking, answering and well-received content
    - A minimum native balance gates answering and voting
    """,
    version="1.0.0",
    lifespan=lifespan
)


# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlatformError)
async def platform_error_handler(request: Request, exc: PlatformError):
    """Map engine failures to their category status code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Register routers
app.include_router(questions.router)
app.include_router(answers.router)
app.include_router(wallet.router)
app.include_router(leaderboard.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "BountyQA API",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    settings = get_platform().settings
    
    return {
        "status": "healthy",
        "fee_bps": settings.fee_bps,
        "platform_owner": settings.platform_owner
    }


@app.get("/config", response_model=PlatformConstants)
async def get_constants():
    """Read-only platform constants."""
    settings = get_platform().settings
    
    return PlatformConstants(
        min_pool_duration=settings.min_pool_duration,
        max_pool_duration=settings.max_pool_duration,
        fee_bps=settings.fee_bps,
        fee_denominator=FEE_DENOMINATOR,
        max_pool_winners=settings.max_pool_winners,
        min_participation_balance=settings.min_participation_balance,
        token_decimals=TOKEN_DECIMALS
    )
