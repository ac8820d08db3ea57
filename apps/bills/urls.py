from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'bills'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.BillViewSet, basename='bill')

urlpatterns = [
    # Bill ViewSet routes
    # GET    /api/bills/                  - List bills
    # POST   /api/bills/                  - Finalize a draft
    # GET    /api/bills/{id}/             - Get bill details
    # DELETE /api/bills/{id}/             - Delete bill

    # Custom bill actions
    # POST   /api/bills/preview/          - Live breakdown of a draft
    # POST   /api/bills/scan/             - Receipt image to draft
    # GET    /api/bills/{id}/breakdown/   - Breakdown of a stored bill

    # Include router URLs
    path('', include(router.urls)),
]
