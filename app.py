from src.attendance_import.attendance_import.main import create_app

# Spawned worker processes re-import this module; build the app only when run directly.
# `flask --app app run` finds create_app on its own.
if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config["DEBUG"])
