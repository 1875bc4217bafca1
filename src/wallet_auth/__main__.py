"""Run the Wallet Auth API with uvicorn."""

import uvicorn

from wallet_auth.core.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "wallet_auth.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
