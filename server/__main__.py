"""
Run the document analysis service.

Usage:
    python -m server
"""

import os

import constants
from . import create_app


def main():
    if not os.path.exists(constants.UPLOAD_FOLDER):
        os.makedirs(constants.UPLOAD_FOLDER)

    app = create_app()
    print(f"🚀 Server running at http://{constants.HOST}:{constants.PORT} (docs: /docs/)")
    app.run(debug=constants.DEBUG, port=constants.PORT, host=constants.HOST)


if __name__ == '__main__':
    main()
