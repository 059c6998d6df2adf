"""
Record operations: minister payloads, reference conflicts and list queries.

Run with:
    python manage.py test ministry.tests.test_services -v 2
"""
from django.test import TestCase
from ministry.forms import MinistryRankForm
from ministry.models import CivilStatus, Minister, MinistryExperience, MinistryRank
from ministry.serializers import minister_to_draft
from ministry.services import (
    Conflict, InvalidPayload, ListQuery, apply_sort, create_minister, delete_reference,
    paginate, parse_list_query, save_reference, search_ministers, update_minister,
)
from .helpers import make_church, make_minister, make_rank, make_skill, minister_draft


class CreateMinisterTest(TestCase):

    def test_creates_minister_with_lists(self):
        rank = make_rank()
        skill = make_skill()
        draft = minister_draft(
            emergency_contacts=[{"name": "Rosa", "relationship": "Sister",
                                 "address": "Manila", "contact_number": "0917"}],
            ministry_experiences=[{"ministry_rank": rank.pk, "from_year": "2010", "to_year": ""}],
            ministry_skills=[{"ministry_skill": skill.pk}],
        )
        minister = create_minister(draft)

        self.assertEqual(Minister.objects.count(), 1)
        self.assertEqual(minister.emergency_contacts.get().name, "Rosa")
        self.assertEqual(minister.ministry_experiences.get().ministry_rank, rank)
        self.assertEqual(minister.ministry_skills.get().ministry_skill, skill)

    def test_list_order_is_kept(self):
        draft = minister_draft(awards_recognitions=[
            {"year": "2020", "description": "First"},
            {"year": "2018", "description": "Second"},
        ])
        minister = create_minister(draft)
        self.assertEqual(
            [a.description for a in minister.awards_recognitions.all()], ["First", "Second"]
        )

    def test_invalid_entry_reports_dotted_path(self):
        draft = minister_draft(employment_records=[
            {"company_name": "Acme", "position": "Clerk", "from_year": "2015", "to_year": "2010"},
        ])
        with self.assertRaises(InvalidPayload) as ctx:
            create_minister(draft)
        fields = [d["field"] for d in ctx.exception.details]
        self.assertIn("employment_records.0.to_year", fields)
        self.assertEqual(Minister.objects.count(), 0)

    def test_missing_required_field(self):
        with self.assertRaises(InvalidPayload) as ctx:
            create_minister(minister_draft(first_name=""))
        self.assertIn("first_name", [d["field"] for d in ctx.exception.details])

    def test_unknown_rank_is_rejected(self):
        draft = minister_draft(ministry_experiences=[{"ministry_rank": 999, "from_year": "2010"}])
        with self.assertRaises(InvalidPayload):
            create_minister(draft)

    def test_single_with_spouse_is_rejected(self):
        with self.assertRaises(InvalidPayload):
            create_minister(minister_draft(civil_status=CivilStatus.SINGLE, spouse_name="Ana"))


class UpdateMinisterTest(TestCase):

    def setUp(self):
        self.minister = create_minister(minister_draft(
            children=[{"name": "Ben", "place_of_birth": "Manila",
                       "date_of_birth": "2012-04-01", "gender": "male"}],
            awards_recognitions=[{"year": "2019", "description": "Faithful service"}],
        ))

    def test_partial_update_keeps_other_fields_and_lists(self):
        update_minister(self.minister, {"nickname": "Jun"})
        self.minister.refresh_from_db()
        self.assertEqual(self.minister.nickname, "Jun")
        self.assertEqual(self.minister.first_name, "Juan")
        self.assertEqual(self.minister.children.count(), 1)
        self.assertEqual(self.minister.awards_recognitions.count(), 1)

    def test_present_list_is_replaced_wholesale(self):
        update_minister(self.minister, {"children": []})
        self.assertEqual(self.minister.children.count(), 0)
        self.assertEqual(self.minister.awards_recognitions.count(), 1)

    def test_full_draft_round_trip(self):
        draft = minister_to_draft(self.minister)
        draft["children"].append({"name": "Cara", "place_of_birth": "Davao",
                                  "date_of_birth": "2015-09-09", "gender": "female"})
        update_minister(self.minister, draft)
        self.assertEqual([c.name for c in self.minister.children.all()], ["Ben", "Cara"])


class ReferenceServiceTest(TestCase):

    def test_duplicate_name_is_conflict(self):
        make_rank("Bishop")
        with self.assertRaises(Conflict) as ctx:
            save_reference(MinistryRankForm(data={"name": "Bishop"}), "ministry rank")
        self.assertIn("already exists", ctx.exception.message)

    def test_blank_name_is_invalid(self):
        with self.assertRaises(InvalidPayload):
            save_reference(MinistryRankForm(data={"name": ""}), "ministry rank")

    def test_delete_rank_in_use_is_conflict(self):
        rank = make_rank()
        MinistryExperience.objects.create(minister=make_minister(), ministry_rank=rank, from_year="2010")
        with self.assertRaises(Conflict):
            delete_reference(rank, "ministry rank")
        self.assertTrue(MinistryRank.objects.filter(pk=rank.pk).exists())

    def test_delete_unused_rank(self):
        rank = make_rank()
        delete_reference(rank, "ministry rank")
        self.assertFalse(MinistryRank.objects.exists())


class ListQueryTest(TestCase):

    def test_defaults(self):
        query = parse_list_query({}, ("created_at", "name"))
        self.assertEqual(query, ListQuery(1, 10, "", "created_at", "desc"))

    def test_accepts_camel_case_sort_params(self):
        query = parse_list_query({"sortBy": "name", "sortOrder": "ASC"}, ("created_at", "name"))
        self.assertEqual((query.sort_by, query.sort_order), ("name", "asc"))

    def test_rejects_bad_values(self):
        with self.assertRaises(InvalidPayload) as ctx:
            parse_list_query({"page": "0", "limit": "500", "sort_by": "password"}, ("name",))
        fields = {d["field"] for d in ctx.exception.details}
        self.assertEqual(fields, {"page", "limit", "sortBy"})

    def test_paginate(self):
        for index in range(3):
            make_rank(f"Rank {index}")
        query = ListQuery(2, 2, "", "name", "asc")
        items, pagination = paginate(apply_sort(MinistryRank.objects.all(), query), query)
        self.assertEqual([r.name for r in items], ["Rank 2"])
        self.assertEqual(pagination, {
            "page": 2, "limit": 2, "total": 3, "totalPages": 2,
            "hasNext": False, "hasPrev": True,
        })

    def test_search_requires_every_word(self):
        make_minister(first_name="Juan", last_name="Santos")
        make_minister(first_name="Juan", last_name="Reyes")
        results = search_ministers(Minister.objects.all(), "juan reyes")
        self.assertEqual([m.last_name for m in results], ["Reyes"])

    def test_church_lookup_in_draft(self):
        church = make_church()
        minister = create_minister(minister_draft(church=church.pk))
        self.assertEqual(minister.church, church)
