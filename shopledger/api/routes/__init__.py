"""API route modules."""

from shopledger.api.routes.activity import router as activity_router
from shopledger.api.routes.backups import router as backups_router
from shopledger.api.routes.expenses import router as expenses_router
from shopledger.api.routes.health import router as health_router
from shopledger.api.routes.maintenance import router as maintenance_router
from shopledger.api.routes.orders import router as orders_router
from shopledger.api.routes.products import router as products_router
from shopledger.api.routes.purchases import router as purchases_router
from shopledger.api.routes.reports import router as reports_router
from shopledger.api.routes.settings import router as settings_router
from shopledger.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "products_router",
    "purchases_router",
    "orders_router",
    "reports_router",
    "settings_router",
    "backups_router",
    "users_router",
    "activity_router",
    "expenses_router",
    "maintenance_router",
]
