import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./billing_portal.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Stripe
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
STRIPE_PUBLISHABLE_KEY = os.getenv("STRIPE_PUBLISHABLE_KEY")
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET")

# Price lookup keys configured in the Stripe dashboard
PLANS = ("starter", "pro", "enterprise")

# ✅ App URLs
APP_URL = os.getenv("APP_URL", "http://localhost:8000").rstrip("/")
PORTAL_RETURN_URL = os.getenv("PORTAL_RETURN_URL", f"{APP_URL}/episodes")
CHECKOUT_SUCCESS_URL = os.getenv("CHECKOUT_SUCCESS_URL", f"{APP_URL}/episodes")
CHECKOUT_CANCEL_URL = os.getenv("CHECKOUT_CANCEL_URL", f"{APP_URL}/")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
