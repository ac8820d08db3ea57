from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Person analytics
    path('people/<str:person_id>/spend/', views.person_spend, name='person-spend'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
]
