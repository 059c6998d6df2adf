"""
JSON API envelope, status codes and list queries.

Run with:
    python manage.py test ministry.tests.test_api -v 2
"""
from django.test import TestCase
from ministry.models import Minister, MinisterSkill, MinistryExperience, MinistryRank, MinistrySkill
from .helpers import make_church, make_minister, make_rank, make_skill, make_user, minister_draft


class ApiTestCase(TestCase):

    def setUp(self):
        self.client.force_login(make_user())

    def send(self, method, url, data):
        return getattr(self.client, method)(url, data=data, content_type="application/json")


class AuthTest(TestCase):

    def test_anonymous_gets_401(self):
        response = self.client.get("/api/minister")
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])


class MinisterApiTest(ApiTestCase):

    def test_create(self):
        response = self.send("post", "/api/minister", minister_draft(
            emergency_contacts=[{"name": "Rosa", "relationship": "Sister",
                                 "address": "Manila", "contact_number": "0917"}],
        ))
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["emergency_contacts"][0]["name"], "Rosa")
        self.assertEqual(Minister.objects.count(), 1)

    def test_create_validation_error(self):
        response = self.send("post", "/api/minister", minister_draft(first_name=""))
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Validation failed")
        self.assertIn("first_name", [d["field"] for d in body["details"]])

    def test_invalid_json(self):
        response = self.client.post("/api/minister", data="{not json", content_type="application/json")
        self.assertEqual(response.status_code, 400)

    def test_list_with_pagination_and_sort(self):
        for name in ("Ana", "Ben", "Carlo"):
            make_minister(first_name=name)
        response = self.client.get("/api/minister", {"limit": 2, "sort_by": "first_name", "sort_order": "asc"})
        body = response.json()
        self.assertEqual([m["first_name"] for m in body["data"]], ["Ana", "Ben"])
        self.assertEqual(body["pagination"], {
            "page": 1, "limit": 2, "total": 3, "totalPages": 2, "hasNext": True, "hasPrev": False,
        })
        self.assertEqual(body["sort"], {"by": "first_name", "order": "asc"})
        self.assertNotIn("children", body["data"][0])

    def test_list_search(self):
        make_minister(first_name="Ana")
        make_minister(first_name="Ben")
        body = self.client.get("/api/minister", {"search": "ana"}).json()
        self.assertEqual([m["first_name"] for m in body["data"]], ["Ana"])
        self.assertEqual(body["search"], "ana")

    def test_bad_query(self):
        response = self.client.get("/api/minister", {"limit": 0})
        self.assertEqual(response.status_code, 400)

    def test_detail(self):
        minister = make_minister()
        body = self.client.get(f"/api/minister/{minister.pk}").json()
        self.assertEqual(body["data"]["full_name"], "Juan Dela Cruz")
        self.assertEqual(body["data"]["children"], [])

    def test_invalid_id(self):
        self.assertEqual(self.client.get("/api/minister/abc").status_code, 400)

    def test_not_found(self):
        self.assertEqual(self.client.get("/api/minister/999").status_code, 404)

    def test_update(self):
        minister = make_minister()
        response = self.send("put", f"/api/minister/{minister.pk}", {"nickname": "Jun"})
        self.assertEqual(response.status_code, 200)
        minister.refresh_from_db()
        self.assertEqual(minister.nickname, "Jun")

    def test_delete(self):
        minister = make_minister()
        response = self.client.delete(f"/api/minister/{minister.pk}")
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Minister.objects.exists())

    def test_method_not_allowed(self):
        self.assertEqual(self.client.patch("/api/minister").status_code, 405)


class RankApiTest(ApiTestCase):

    def test_create(self):
        response = self.send("post", "/api/ministry-ranks", {"name": "Elder", "description": "Church elder"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["data"]["minister_count"], 0)

    def test_duplicate_is_409(self):
        make_rank("Elder")
        response = self.send("post", "/api/ministry-ranks", {"name": "Elder"})
        self.assertEqual(response.status_code, 409)
        self.assertIn("already exists", response.json()["error"])

    def test_partial_update_keeps_description(self):
        rank = make_rank("Elder", "Church elder")
        self.send("put", f"/api/ministry-ranks/{rank.pk}", {"name": "Senior Elder"})
        rank.refresh_from_db()
        self.assertEqual((rank.name, rank.description), ("Senior Elder", "Church elder"))

    def test_delete_in_use_is_409(self):
        rank = make_rank()
        MinistryExperience.objects.create(minister=make_minister(), ministry_rank=rank, from_year="2010")
        response = self.client.delete(f"/api/ministry-ranks/{rank.pk}")
        self.assertEqual(response.status_code, 409)
        self.assertTrue(MinistryRank.objects.filter(pk=rank.pk).exists())

    def test_list_counts_ministers(self):
        rank = make_rank()
        MinistryExperience.objects.create(minister=make_minister(), ministry_rank=rank, from_year="2010")
        body = self.client.get("/api/ministry-ranks").json()
        self.assertEqual(body["data"][0]["minister_count"], 1)

    def test_export(self):
        make_rank()
        response = self.client.get("/api/ministry-ranks/export")
        self.assertEqual(response.status_code, 200)
        self.assertIn("ministry_ranks_", response["Content-Disposition"])


class SkillApiTest(ApiTestCase):

    def test_list_is_paginated(self):
        for index in range(12):
            make_skill(f"Skill {index:02d}", "Serving")
        response = self.client.get("/api/ministry-skills", {"page": 2, "limit": 5, "sortBy": "name", "sortOrder": "asc"})
        body = response.json()
        self.assertEqual([s["name"] for s in body["data"]], [f"Skill {i:02d}" for i in range(5, 10)])
        self.assertEqual(body["pagination"]["total"], 12)
        self.assertEqual(body["pagination"]["totalPages"], 3)
        self.assertTrue(body["pagination"]["hasNext"])
        self.assertTrue(body["pagination"]["hasPrev"])
        self.assertEqual(body["sort"], {"by": "name", "order": "asc"})

    def test_list_search(self):
        make_skill("Worship", "Leading songs")
        make_skill("Preaching", "Delivering sermons")
        body = self.client.get("/api/ministry-skills", {"search": "songs"}).json()
        self.assertEqual([s["name"] for s in body["data"]], ["Worship"])
        self.assertEqual(body["search"], "songs")

    def test_create_requires_description(self):
        response = self.send("post", "/api/ministry-skills", {"name": "Worship", "description": ""})
        self.assertEqual(response.status_code, 400)
        self.assertIn("description", [d["field"] for d in response.json()["details"]])

    def test_create_and_duplicate(self):
        created = self.send("post", "/api/ministry-skills", {"name": "Worship", "description": "Leading songs"})
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["minister_count"], 0)
        duplicate = self.send("post", "/api/ministry-skills", {"name": "Worship", "description": "Again"})
        self.assertEqual(duplicate.status_code, 409)

    def test_detail_and_partial_update(self):
        skill = make_skill("Worship", "Leading songs")
        self.assertEqual(self.client.get(f"/api/ministry-skills/{skill.pk}").json()["data"]["name"], "Worship")
        self.send("put", f"/api/ministry-skills/{skill.pk}", {"name": "Worship Leading"})
        skill.refresh_from_db()
        self.assertEqual((skill.name, skill.description), ("Worship Leading", "Leading songs"))

    def test_delete_in_use_is_409(self):
        skill = make_skill()
        MinisterSkill.objects.create(minister=make_minister(), ministry_skill=skill)
        response = self.client.delete(f"/api/ministry-skills/{skill.pk}")
        self.assertEqual(response.status_code, 409)
        self.assertTrue(MinistrySkill.objects.filter(pk=skill.pk).exists())

    def test_delete(self):
        skill = make_skill()
        self.assertEqual(self.client.delete(f"/api/ministry-skills/{skill.pk}").status_code, 200)
        self.assertFalse(MinistrySkill.objects.exists())

    def test_not_found(self):
        self.assertEqual(self.client.get("/api/ministry-skills/999").status_code, 404)

    def test_export(self):
        make_skill()
        response = self.client.get("/api/ministry-skills/export")
        self.assertEqual(response.status_code, 200)
        self.assertIn("ministry_skills_", response["Content-Disposition"])


class ChurchApiTest(ApiTestCase):

    def test_list_is_paginated_by_name(self):
        make_church("Bethel", latitude="14.599512", longitude="120.984222")
        make_church("Antioch")
        make_church("Calvary")
        body = self.client.get("/api/churches", {"limit": 2}).json()
        self.assertEqual([c["name"] for c in body["data"]], ["Antioch", "Bethel"])
        self.assertAlmostEqual(body["data"][1]["latitude"], 14.599512)
        self.assertEqual(body["pagination"]["total"], 3)
        self.assertEqual(body["sort"], {"by": "name", "order": "asc"})

    def test_minister_count(self):
        church = make_church()
        make_minister(church=church)
        body = self.client.get(f"/api/churches/{church.pk}").json()
        self.assertEqual(body["data"]["minister_count"], 1)

    def test_ministers_of_church(self):
        church = make_church()
        make_minister(first_name="Ana", church=church)
        make_minister(first_name="Ben", church=church)
        make_minister(first_name="Carlo")
        body = self.client.get(f"/api/churches/{church.pk}/ministers",
                               {"sortBy": "first_name", "sortOrder": "asc"}).json()
        self.assertEqual([m["first_name"] for m in body["data"]], ["Ana", "Ben"])
        self.assertEqual(body["pagination"]["total"], 2)

    def test_ministers_search(self):
        church = make_church()
        make_minister(first_name="Ana", church=church)
        make_minister(first_name="Ben", church=church)
        body = self.client.get(f"/api/churches/{church.pk}/ministers", {"search": "ben"}).json()
        self.assertEqual([m["first_name"] for m in body["data"]], ["Ben"])

    def test_ministers_of_unknown_church(self):
        self.assertEqual(self.client.get("/api/churches/999/ministers").status_code, 404)
        self.assertEqual(self.client.get("/api/churches/abc/ministers").status_code, 400)

    def test_ministers_export(self):
        church = make_church("Redeemer Church")
        make_minister(church=church)
        response = self.client.get(f"/api/churches/{church.pk}/ministers/export")
        self.assertEqual(response.status_code, 200)
        self.assertIn("redeemer-church_ministers_", response["Content-Disposition"])

    def test_export(self):
        make_church()
        response = self.client.get("/api/churches/export")
        self.assertEqual(response.status_code, 200)
        self.assertIn("churches_", response["Content-Disposition"])


class MinisterSearchApiTest(ApiTestCase):

    def test_short_query_is_rejected(self):
        response = self.client.get("/api/minister/search", {"q": "a"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("at least 2 characters", response.json()["error"])

    def test_matches_names(self):
        make_minister(first_name="Ana", middle_name="Santos")
        make_minister(first_name="Ben", last_name="Reyes")
        body = self.client.get("/api/minister/search", {"q": "santos"}).json()
        self.assertEqual([m["first_name"] for m in body["data"]], ["Ana"])
        self.assertEqual(body["data"][0]["full_name"], "Ana Santos Dela Cruz")

    def test_every_word_must_match(self):
        make_minister(first_name="Juan", last_name="Santos")
        make_minister(first_name="Juan", last_name="Reyes")
        body = self.client.get("/api/minister/search", {"q": "juan reyes"}).json()
        self.assertEqual([m["last_name"] for m in body["data"]], ["Reyes"])

    def test_capped_at_twenty(self):
        for index in range(25):
            make_minister(first_name=f"Pedro{index:02d}")
        body = self.client.get("/api/minister/search", {"q": "pedro"}).json()
        self.assertEqual(len(body["data"]), 20)
        self.assertEqual(body["data"][0]["first_name"], "Pedro00")
