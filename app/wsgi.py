from app.rpv import create_app

app = create_app()
