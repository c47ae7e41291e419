from flask import Blueprint, render_template, send_from_directory
from flask.typing import ResponseReturnValue

bp = Blueprint("swagger", __name__, url_prefix="/swagger", template_folder="templates")


@bp.route("")
@bp.route("/")
def index() -> ResponseReturnValue:
    return render_template("swagger.html")


@bp.route("/openapi.yaml")
def specification() -> ResponseReturnValue:
    return send_from_directory("static", "openapi.yaml", mimetype="application/yaml")
