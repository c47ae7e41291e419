import structlog
from flask import Blueprint
from flask.typing import ResponseReturnValue
from werkzeug.exceptions import HTTPException

from athenai import catalog, custom, database as db, gyms, users, version, views, workouts
from athenai.errors import APIError, ErrorCode

logger = structlog.get_logger(__name__)

bp = Blueprint("api", __name__, url_prefix="/api/v1")

bp.register_blueprint(gyms.bp)
bp.register_blueprint(catalog.bp)
bp.register_blueprint(users.bp)
bp.register_blueprint(custom.bp)
bp.register_blueprint(workouts.bp)


@bp.route("/version")
def read_version() -> ResponseReturnValue:
    return views.success(version.get(), "Version retrieved successfully")


@bp.app_errorhandler(APIError)
def handle_api_error(e: APIError) -> ResponseReturnValue:
    db.rollback_sessions()
    return views.error(e.code, e.message, e.cause)


@bp.app_errorhandler(HTTPException)
def handle_http_exception(e: HTTPException) -> ResponseReturnValue:
    status = e.code or 500
    return views.error(ErrorCode.from_status(status), e.description or e.name, status=status)


@bp.app_errorhandler(Exception)
def handle_exception(e: Exception) -> ResponseReturnValue:
    db.rollback_sessions()
    logger.exception("unhandled error")
    return views.error(ErrorCode.INTERNAL_ERROR, "internal server error", e)


@bp.teardown_app_request
def remove_sessions(_: BaseException | None) -> None:
    db.remove_sessions()
