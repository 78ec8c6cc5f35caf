"""
Where-to-Buy - Main Entry Point
Runs the Flask development server.
"""
from where_to_buy import create_app
from where_to_buy.config import Config

app = create_app()


if __name__ == "__main__":
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=Config.PORT)
