"""
URL configuration for config project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path
from fantasy.views import (
    dashboard, edit_roster, market, race_results, valuation_table, standings_json,
)

urlpatterns = [
    path('', dashboard, name='dashboard'),
    path('rosters/<int:team_id>/edit/', edit_roster, name='edit_roster'),
    path('market/', market, name='market'),
    path('races/<int:race_id>/results/', race_results, name='race_results'),
    path('api/valuation-table/', valuation_table, name='valuation_table'),
    path('api/standings/', standings_json, name='standings'),
    path('admin/', admin.site.urls),
]
