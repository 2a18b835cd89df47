"""
Private Terraform module registry.

Serves and accepts versioned module archives over the Terraform Module
Registry Protocol. Archives are stored on disk under REGISTRY_ROOT, one
zip file per version; the directory tree is the only index.

Architecture:
    1. Terraform fetches /.well-known/terraform.json to find the module API
    2. Terraform lists versions (GET /v1/modules/<ns>/<name>/<system>/versions)
    3. Terraform asks for a version's download location
       (GET .../<version>/download), answered with 204 + X-Terraform-Get
    4. Terraform follows X-Terraform-Get to GET .../<version>/file.zip
    Publishing is a raw POST of the zip to .../<version>/upload.

Module Endpoints:
    - GET  /.well-known/terraform.json - Service discovery
    - GET  /v1/modules/<ns>/<name>/<system>/versions - List versions
    - GET  /v1/modules/<ns>/<name>/<system>/<version>/download - Resolve download URL
    - GET  /v1/modules/<ns>/<name>/<system>/<version>/file.zip - Archive bytes
    - POST /v1/modules/<ns>/<name>/<system>/<version>/upload - Publish a version

Environment Variables:
    LOG_LEVEL, FLASK_HOST, FLASK_PORT, REGISTRY_ROOT, MAX_SEGMENT_LENGTH,
    MAX_UPLOAD_SIZE, TRUST_PROXY_HEADERS

Example:
    $ REGISTRY_ROOT=/var/lib/registry python app.py
    $ curl --data-binary @vpc.zip localhost:3001/v1/modules/acme/vpc/aws/1.0.0/upload
    $ curl localhost:3001/v1/modules/acme/vpc/aws/versions
"""

import logging

from module_registry.config import config
from module_registry.routes import create_app

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point for the registry application."""
    debug_mode = logger.getEffectiveLevel() == logging.DEBUG
    app = create_app(config)
    logger.info(f"Starting module registry service on {config.FLASK_HOST}:{config.FLASK_PORT}")
    logger.info(f"Configuration: {config}")
    logger.info(f"Log level: {logging.getLevelName(logger.getEffectiveLevel())}")
    if debug_mode:
        logger.info("Flask debug mode enabled")
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=debug_mode, threaded=True)


if __name__ == "__main__":
    main()
