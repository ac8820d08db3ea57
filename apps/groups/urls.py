from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group with members
    # DELETE /api/groups/{id}/         - Delete group

    # Include router URLs
    path('', include(router.urls)),
]
