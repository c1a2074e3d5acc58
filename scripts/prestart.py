# scripts/prestart.py
import sys
from app import create_app


def main():
    app = create_app()
    repo = app.extensions["repository"]
    if not repo.is_document_store:
        print("Prestart: JSON fallback active, no slot metadata to write")
        return
    for name, manager in app.extensions["slot_managers"].items():
        try:
            # Records the pool layout under _metadata, which listing and reset skip
            manager.write_metadata()
            print(f"Prestart: {name} pool metadata written ({manager.pool.capacity} slots)")
        except Exception as e:
            print(f"Prestart: could not write {name} pool metadata: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
