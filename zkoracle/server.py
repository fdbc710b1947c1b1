# zkoracle/server.py
"""
zkoracle — Attestation Oracle Server

Endpoints:
  POST /oracle/GetSubscriptionInfo       — PayPal subscription plan + age
  POST /oracle/VerifyGoogleCredential    — Google account email domain
  GET  /oracle/pubkey                    — Oracle public key (packed + affine)
  GET  /health                           — Liveness

Usage:
  python -m zkoracle.server [port]
"""

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from zkoracle import __version__, encoding
from zkoracle.config import load_config
from zkoracle.errors import ConfigError, OracleError, SigningError
from zkoracle.models import DomainRequest, SubscriptionRequest
from zkoracle.service import OracleService, build_service

log = logging.getLogger("zkoracle.server")


class SubscriptionInput(BaseModel):
    code: str
    subscriptionID: str


class GoogleInput(BaseModel):
    googleCodeToken: str


def _respond(result):
    if isinstance(result, OracleError):
        return JSONResponse(result.to_dict(), status_code=400)
    return JSONResponse(result.to_dict())


def create_app(service: OracleService) -> FastAPI:
    app = FastAPI(
        title="zkoracle",
        description="Signed attestations of verified account facts for zero-knowledge verifiers",
        version=__version__,
    )

    @app.post("/oracle/GetSubscriptionInfo")
    def get_subscription_info(body: SubscriptionInput):
        return _respond(service.get_subscription_info(
            SubscriptionRequest(authorization_code=body.code, subscription_id=body.subscriptionID)
        ))

    @app.post("/oracle/VerifyGoogleCredential")
    def verify_google_credential(body: GoogleInput):
        return _respond(service.verify_google_credential(
            DomainRequest(identity_token=body.googleCodeToken)
        ))

    @app.get("/oracle/pubkey")
    def get_pubkey():
        ax, ay = service.key.public_point
        return {
            "oracle_pubkey": service.key.public_key_hex,
            "Ax": str(ax),
            "Ay": str(ay),
            "curve": "babyjubjub",
            "scheme": "eddsa-pedersen",
            "key_bytes": 32,
            "text_field_length": encoding.TEXT_FIELD_LENGTH,
        }

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "zkoracle", "version": __version__}

    return app


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    argv = sys.argv[1:] if argv is None else argv

    try:
        config = load_config()
        service = build_service(config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    except SigningError as e:
        print(f"ERROR: invalid ORACLE_PRIVATE_KEY ({e.detail})")
        sys.exit(1)

    port = int(argv[0]) if argv else config.port
    log.info(f"zkoracle v{__version__} starting on :{port}")
    log.info(f"Public key: {service.key.public_key_hex}")
    log.info(f"PayPal API: {config.paypal_base_api_url}")
    uvicorn.run(create_app(service), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
