#!/usr/bin/env python3
"""
Flask REST API for Disposal Agent Service.

Uses environment variables (or a local .env file) for configuration.
"""
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from pydantic import ValidationError as SchemaValidationError

# Add service to path (src/ sits next to this file)
sys.path.insert(0, str(Path(__file__).parent / "src"))

# Public API imports
from disposal_agent.app import DisposalAgentApp
from disposal_agent.config_loader import load_config_from_env
from disposal_agent.config_validator import get_bool_env
from disposal_agent.exceptions import DisposalAgentError, ProviderNotFoundError
from disposal_agent.schemas import ResolveRequest
from disposal_agent.security import InputValidator, ValidationError

# Load environment variables
load_dotenv()

app = Flask(__name__)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Security: Rate limiting
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    default_limits=["100 per hour", "30 per minute"],
    storage_uri="memory://",
)
limiter.enabled = get_bool_env("RATELIMIT_ENABLED", True)
logger.info(f"Rate limiting {'enabled' if limiter.enabled else 'disabled'}")

# Global instances
agent_app: Optional[DisposalAgentApp] = None


def _initialize_agent_from_env():
    """Initialize agent from environment variables."""
    global agent_app

    if agent_app is not None:
        return

    try:
        config = load_config_from_env(load_env_file=False)
        logging.getLogger().setLevel(config.log_level)
        agent_app = DisposalAgentApp(config)
        agent_app.initialize()
        logger.info("Agent initialized successfully from environment variables")

    except DisposalAgentError as e:
        logger.error(f"Failed to initialize agent: {str(e)}", exc_info=True)
        agent_app = None


# Initialize on startup
_initialize_agent_from_env()


def _agent_unavailable():
    return jsonify({"error": "Service not initialized. Please check configuration."}), 500


@app.route("/resolve", methods=["POST"])
def resolve():
    """Resolve an item description to a disposal category."""
    if agent_app is None:
        return _agent_unavailable()

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid request", "details": "Request body must be a JSON object"}), 400

        try:
            resolve_request = ResolveRequest.model_validate(data)
        except SchemaValidationError as e:
            logger.warning(f"Resolve request rejected: {e.error_count()} validation errors")
            return jsonify({
                "error": "Invalid request",
                "details": json.loads(e.json(include_url=False)),
            }), 400

        response = agent_app.resolve(resolve_request)
        return jsonify(response.to_dict())

    except ProviderNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404

    except Exception as e:
        logger.error(f"Resolve endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": "Resolve failed"}), 500


@app.route("/search", methods=["GET"])
def search():
    """Autocomplete search with "did you mean" suggestions."""
    if agent_app is None:
        return _agent_unavailable()

    try:
        try:
            query = InputValidator.sanitize_query(request.args.get("q"))
            limit = InputValidator.validate_limit(
                request.args.get("limit"), default=agent_app.service.config.search_limit
            )
        except ValidationError as e:
            logger.warning(f"Search validation failed: {str(e)}")
            return jsonify({"error": str(e)}), 400

        if not query:
            return jsonify([])

        provider_id = request.args.get("provider") or agent_app.default_provider_id
        response = agent_app.search(provider_id, query, limit)
        return jsonify(response.to_payload())

    except ProviderNotFoundError as e:
        logger.warning(str(e))
        return jsonify({"error": str(e)}), 404

    except Exception as e:
        logger.error(f"Search endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": "Search failed"}), 500


@app.route("/providers", methods=["GET"])
def providers():
    """List available providers."""
    if agent_app is None:
        return _agent_unavailable()

    try:
        return jsonify([p.summary() for p in agent_app.list_providers()])
    except Exception as e:
        logger.error(f"Providers endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": "Could not list providers"}), 500


@app.route("/providers/<provider_id>", methods=["GET"])
def provider_detail(provider_id: str):
    """Full provider document."""
    if agent_app is None:
        return _agent_unavailable()

    try:
        return jsonify(agent_app.get_provider(provider_id).to_dict())
    except ProviderNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        logger.error(f"Provider endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": "Could not load provider"}), 500


if __name__ == "__main__":
    port = int(os.getenv("PORT", 7860))
    # Disable debug mode for production
    app.run(host="0.0.0.0", port=port, debug=False)
