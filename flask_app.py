try:
    from dotenv import load_dotenv; load_dotenv()
except Exception:
    pass
from app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 5000)), threaded=True)
