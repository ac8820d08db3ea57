from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'people'

router = DefaultRouter()
router.register(r'', views.PersonViewSet, basename='person')

urlpatterns = [
    # GET    /api/people/       - List contacts (excluding current user)
    # POST   /api/people/       - Add contact
    # GET    /api/people/me/    - Current user
    # GET    /api/people/{id}/  - Get person
    # DELETE /api/people/{id}/  - Remove contact
    path('', include(router.urls)),
]
