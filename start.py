"""
Quick start script for local development.
Seeds the demo data on an empty database and starts the server.
"""
import subprocess
import sys


def main():
    """Seeds the database and starts the server."""
    print("SolarView Pro - Initialization\n")

    print("Seeding demo data...")
    try:
        subprocess.run([sys.executable, "scripts/seed_demo_data.py"], check=True)
    except subprocess.CalledProcessError:
        print("Error seeding demo data. Attempting to continue...\n")

    print("Starting FastAPI server on port 8000...")
    print("Documentation: http://localhost:8000/docs")
    print("Health check:  http://localhost:8000/health\n")

    try:
        subprocess.run(
            [sys.executable, "-m", "uvicorn", "solarview.main:app", "--reload", "--host", "0.0.0.0", "--port", "8000"],
            check=True
        )
    except KeyboardInterrupt:
        print("\n\nServer stopped. Goodbye!")
    except Exception as e:
        print(f"\nError starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
