"""
FastAPI REST API Module

Provides REST endpoints for the teller actions: account creation, deposits,
withdrawals and account queries. Runs on port 8090 by default.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Depends, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from . import __version__
from .accounts import AccountRegistry, describe_fields
from .amounts import parse_account_number
from .config import BankLedgerConfig, get_config
from .errors import ErrorKind, LedgerError
from .teller import Teller, TellerResult

ERROR_STATUS = {
    ErrorKind.ACCOUNT_NOT_FOUND: 404,
    ErrorKind.DUPLICATE_ACCOUNT: 409,
    ErrorKind.INSUFFICIENT_BALANCE: 422,
    ErrorKind.INVALID_NUMERIC_INPUT: 400,
    ErrorKind.INVALID_AMOUNT: 400,
}


# Pydantic models for API requests
class CreateAccountRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    holder_name: str
    account_number: str = Field(..., description="Account number as entered")
    amount: Optional[str] = Field(None, description="Opening balance; empty means zero")


class AmountRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    amount: str = Field(..., description="Decimal amount as string")


# Ledger System Context
class BankLedgerSystem:
    """Registry and teller wired from configuration"""

    def __init__(self, config: Optional[BankLedgerConfig] = None):
        self.config = config or get_config()
        self.teller = Teller.from_config(self.config)

    @property
    def registry(self) -> AccountRegistry:
        return self.teller.registry


def get_ledger_system(request: Request) -> BankLedgerSystem:
    return request.app.state.ledger_system


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS[kind],
        content={"detail": message, "error": kind.value}
    )


def result_response(result: TellerResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Translate a teller result into an HTTP response"""
    if not result.ok:
        return error_response(result.error, result.message)
    content = {"message": result.message, "account": result.account}
    if result.warning:
        content["warning"] = result.warning
    return JSONResponse(status_code=success_status, content=content)


def create_app(system: Optional[BankLedgerSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""

    app = FastAPI(
        title="Bank Ledger API",
        description="Account ledger with deposits, withdrawals and a transaction log",
        version=__version__,
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

    app.state.ledger_system = system or BankLedgerSystem()

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.post("/accounts", status_code=status.HTTP_201_CREATED)
    def create_account(
        request: CreateAccountRequest,
        system: BankLedgerSystem = Depends(get_ledger_system)
    ):
        """Open an account"""
        result = system.teller.create_account(
            request.holder_name, request.account_number, request.amount or ""
        )
        return result_response(result, status.HTTP_201_CREATED)

    @app.get("/accounts")
    def list_accounts(system: BankLedgerSystem = Depends(get_ledger_system)):
        """List all accounts"""
        return {"accounts": system.registry.snapshots()}

    @app.get("/accounts/{account_number}")
    def get_account(
        account_number: str,
        system: BankLedgerSystem = Depends(get_ledger_system)
    ):
        """Get account details"""
        try:
            fields = system.registry.snapshot(parse_account_number(account_number))
        except LedgerError as e:
            return error_response(e.kind, e.message)
        return {"account": fields, "details": describe_fields(fields)}

    @app.post("/accounts/{account_number}/deposit")
    def deposit(
        account_number: str,
        request: AmountRequest,
        system: BankLedgerSystem = Depends(get_ledger_system)
    ):
        """Make a deposit"""
        return result_response(system.teller.deposit(account_number, request.amount))

    @app.post("/accounts/{account_number}/withdraw")
    def withdraw(
        account_number: str,
        request: AmountRequest,
        system: BankLedgerSystem = Depends(get_ledger_system)
    ):
        """Make a withdrawal"""
        return result_response(system.teller.withdraw(account_number, request.amount))

    @app.get("/")
    async def root():
        """Root endpoint with system information"""
        return {
            "system": "Bank Ledger",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "accounts": "/accounts"
            }
        }

    return app


app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    uvicorn.run(
        "bank_ledger.api:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
