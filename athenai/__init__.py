import os

from flask import Flask

from . import api, config, log, swagger

app = Flask(__name__)

app.config.from_object("athenai.default_config")
app.config.from_envvar("ATHENAI_CONFIG", silent=True)
config.load_environment(app.config, os.environ)

log.configure_logging(app.config["LOG_LEVEL"], app.config["APP_ENV"])

app.register_blueprint(api.bp)
app.register_blueprint(swagger.bp)
