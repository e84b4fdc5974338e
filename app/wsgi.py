from app.clubhouse import create_app

app = create_app()
