"""
Flask application and Terraform module registry endpoints.

Implements the module retrieval and publishing parts of the Terraform
Module Registry Protocol.
"""

import logging

from flask import Blueprint, Flask, Response, current_app, jsonify, request, send_file, url_for
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config, config as default_config
from .exceptions import ArchiveNotFoundError, RegistryError, VersionExistsError
from .store import ModuleStore
from .validation import validate_coordinate, validate_version

logger = logging.getLogger(__name__)

modules = Blueprint("modules", __name__, url_prefix="/v1/modules")
discovery = Blueprint("discovery", __name__)


def get_store() -> ModuleStore:
    """Module store bound to the current application."""
    return current_app.extensions["module_store"]


def _validate(namespace, name, system, version=None):
    max_length = current_app.config["MAX_SEGMENT_LENGTH"]
    validate_coordinate(namespace, name, system, max_length)
    if version is not None:
        validate_version(version, max_length)


# -------------------------------
# Discovery
# -------------------------------


@discovery.route("/.well-known/terraform.json")
def service_discovery():
    """
    Terraform remote service discovery document.

    Advertises the base URL of the module API, built from the scheme and
    host of the incoming request.

    Returns:
        {"modules.v1": "<scheme>://<host>/v1/modules/"}
    """
    base_url = f"{request.url_root}v1/modules/"
    logger.info(f"Discovery document requested, modules.v1={base_url}")
    return jsonify({"modules.v1": base_url})


# -------------------------------
# Module Endpoints
# -------------------------------


@modules.route("/<namespace>/<name>/<system>/versions")
def list_versions(namespace, name, system):
    """
    List available versions of a module.

    Args:
        namespace: Module namespace (validated)
        name: Module name (validated)
        system: Target system, e.g. "aws" (validated)

    Response Format:
        {
            "modules": [
                {
                    "versions": [
                        {"version": "1.0.0"},
                        {"version": "1.1.0"}
                    ]
                }
            ]
        }

    Versions appear in storage listing order.

    Raises:
        400: Invalid path segment
        404: Nothing uploaded for this module
    """
    _validate(namespace, name, system)

    versions = get_store().list_versions(namespace, name, system)
    logger.info(f"Versions listed: module='{namespace}/{name}/{system}', count={len(versions)}")
    return jsonify({"modules": [{"versions": [{"version": version} for version in versions]}]})


@modules.route("/<namespace>/<name>/<system>/<version>/download")
def download(namespace, name, system, version):
    """
    Resolve the download location of a module version.

    Returns an empty 204 response whose X-Terraform-Get header points at the
    file.zip endpoint of the same version. Clients fetch the archive with a
    second request.

    Raises:
        400: Invalid path segment
        404: Version not found
    """
    _validate(namespace, name, system, version)

    store = get_store()
    if not store.archive_exists(namespace, name, system, version):
        logger.warning(f"Download of missing version: module='{namespace}/{name}/{system}', version='{version}'")
        raise ArchiveNotFoundError(namespace, name, system, version)

    file_url = url_for(
        "modules.download_file",
        namespace=namespace,
        name=name,
        system=system,
        version=version,
        _external=True,
    )
    logger.info(f"Download resolved: module='{namespace}/{name}/{system}', version='{version}', url={file_url}")
    resp = Response(status=204)
    resp.headers["X-Terraform-Get"] = file_url
    return resp


@modules.route("/<namespace>/<name>/<system>/<version>/file.zip")
def download_file(namespace, name, system, version):
    """
    Stream the archive of a module version.

    The body is the stored archive, unmodified.

    Raises:
        400: Invalid path segment
        404: Version not found
    """
    _validate(namespace, name, system, version)

    archive = get_store().read_archive(namespace, name, system, version)
    logger.info(f"Archive sent: module='{namespace}/{name}/{system}', version='{version}'")
    return send_file(archive, mimetype="application/zip", download_name=f"{version}.zip")


@modules.route("/<namespace>/<name>/<system>/<version>/upload", methods=["POST"])
def upload(namespace, name, system, version):
    """
    Publish a new module version.

    The request body is the raw zip archive. Versions are immutable: an
    existing version is never overwritten.

    Validation Order:
        1. Version already exists -> 400, bump the version and retry
        2. Empty body -> 400
        3. Store the archive -> 200 "Success!"

    Raises:
        400: Invalid path segment, existing version, or empty body
        413: Body larger than MAX_UPLOAD_SIZE
    """
    _validate(namespace, name, system, version)

    store = get_store()
    # Reject before reading the body
    if store.archive_exists(namespace, name, system, version):
        logger.warning(f"Upload of existing version: module='{namespace}/{name}/{system}', version='{version}'")
        raise VersionExistsError(version)

    data = request.get_data(cache=False)
    logger.debug(f"Upload received: {len(data)} bytes")

    store.write_archive(namespace, name, system, version, data)
    logger.info(f"Module published: module='{namespace}/{name}/{system}', version='{version}'")
    return Response("Success!", status=200, mimetype="text/plain")


# -------------------------------
# Error Handlers
# -------------------------------


def _error_response(status: int, message: str):
    resp = jsonify({"status": status, "error": message})
    resp.status_code = status
    return resp


def handle_registry_error(e: RegistryError):
    logger.warning(f"{request.method} {request.path} -> {e.status_code}: {e.message}")
    return _error_response(e.status_code, e.message)


def handle_http_exception(e: HTTPException):
    # Unknown routes and undeclared methods are both plain 404s
    if e.code in (404, 405):
        logger.warning(f"No route for {request.method} {request.path}")
        return _error_response(404, "Not Found")
    return _error_response(e.code, e.description)


def handle_os_error(e: OSError):
    logger.exception(f"Storage error during {request.method} {request.path}")
    return _error_response(500, "Internal server error")


def create_app(cfg: Config | None = None, store: ModuleStore | None = None) -> Flask:
    """
    Create the registry Flask application.

    Args:
        cfg: Registry configuration. Defaults to the environment-driven global config
        store: Module store. Defaults to a store rooted at cfg.REGISTRY_ROOT

    Returns:
        Configured Flask application
    """
    cfg = cfg or default_config
    store = store or ModuleStore(cfg.REGISTRY_ROOT)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = cfg.MAX_UPLOAD_SIZE
    app.config["MAX_SEGMENT_LENGTH"] = cfg.MAX_SEGMENT_LENGTH
    app.extensions["module_store"] = store

    app.register_blueprint(discovery)
    app.register_blueprint(modules)

    app.register_error_handler(RegistryError, handle_registry_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(OSError, handle_os_error)

    if cfg.TRUST_PROXY_HEADERS:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
        logger.debug("Honouring X-Forwarded-Proto and X-Forwarded-Host")

    logger.debug(f"Registry app created with {store!r}")
    return app
