"""
API blueprint for Where-to-Buy
"""
from flask import Blueprint

api_bp = Blueprint("api", __name__)

from where_to_buy.api import routes  # noqa: E402,F401
