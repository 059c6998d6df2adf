from django.urls import path
from . import views, views_export, views_maps, views_wizard

app_name = 'ministry'

urlpatterns = [
    # Minister CRUD
    path('', views.minister_list, name='list'),
    path('create/', views_wizard.minister_create, name='create'),
    path('<int:pk>/', views.minister_detail, name='detail'),
    path('<int:pk>/edit/', views_wizard.minister_update, name='update'),
    path('<int:pk>/delete/', views.minister_delete, name='delete'),
    path('<int:pk>/pdf/', views.minister_pdf, name='pdf'),

    # Registration wizard
    path('wizard/', views_wizard.minister_wizard, name='wizard'),
    path('wizard/pdf/', views_wizard.minister_wizard_pdf, name='wizard_pdf'),

    # Ministry ranks
    path('ranks/', views.rank_list, name='rank_list'),
    path('ranks/create/', views.rank_create, name='rank_create'),
    path('ranks/<int:pk>/edit/', views.rank_update, name='rank_update'),
    path('ranks/<int:pk>/delete/', views.rank_delete, name='rank_delete'),

    # Ministry skills
    path('skills/', views.skill_list, name='skill_list'),
    path('skills/create/', views.skill_create, name='skill_create'),
    path('skills/<int:pk>/edit/', views.skill_update, name='skill_update'),
    path('skills/<int:pk>/delete/', views.skill_delete, name='skill_delete'),

    # Churches
    path('churches/', views.church_list, name='church_list'),
    path('churches/create/', views.church_create, name='church_create'),
    path('churches/<int:pk>/', views.church_detail, name='church_detail'),
    path('churches/<int:pk>/edit/', views.church_update, name='church_update'),
    path('churches/<int:pk>/delete/', views.church_delete, name='church_delete'),

    # Excel export
    path('export/ministers/', views_export.export_ministers, name='export_ministers'),
    path('export/ranks/', views_export.export_ranks, name='export_ranks'),
    path('export/skills/', views_export.export_skills, name='export_skills'),
    path('export/churches/', views_export.export_churches, name='export_churches'),
    path('churches/<int:pk>/export/', views_export.export_church_ministers, name='export_church_ministers'),

    # Location picker
    path('map-picker/<str:action>/', views_maps.map_picker, name='map_picker'),
]
