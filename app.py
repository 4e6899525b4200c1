###############################################################################
# app.py
###############################################################################
import os

from liftlog import create_app

app = create_app()

###############################################################################
# Run the Flask App
###############################################################################
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 5001)), debug=app.config["DEBUG"])
