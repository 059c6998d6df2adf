from django.urls import path
from . import api

app_name = 'api'

urlpatterns = [
    path('minister', api.minister_collection, name='minister_collection'),
    path('minister/export', api.minister_export, name='minister_export'),
    path('minister/search', api.minister_search, name='minister_search'),
    path('minister/<str:minister_id>', api.minister_detail, name='minister_detail'),

    path('ministry-ranks', api.rank_collection, name='rank_collection'),
    path('ministry-ranks/export', api.rank_export, name='rank_export'),
    path('ministry-ranks/<str:rank_id>', api.rank_detail, name='rank_detail'),

    path('ministry-skills', api.skill_collection, name='skill_collection'),
    path('ministry-skills/export', api.skill_export, name='skill_export'),
    path('ministry-skills/<str:skill_id>', api.skill_detail, name='skill_detail'),

    path('churches', api.church_list, name='church_list'),
    path('churches/export', api.church_export, name='church_export'),
    path('churches/<str:church_id>', api.church_detail, name='church_detail'),
    path('churches/<str:church_id>/ministers', api.church_ministers, name='church_ministers'),
    path('churches/<str:church_id>/ministers/export', api.church_ministers_export,
         name='church_ministers_export'),
]
