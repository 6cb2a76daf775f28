"""회원 API 테스트.

Member API tests — search, paginated search, statistics and CRUD endpoints.
"""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from app.repositories.member_repository import member_repository

URL = "/api/v1/members"


class TestMemberSearchApi:
    """조건 검색 엔드포인트."""

    async def test_search_with_condition(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={
            "age_goe": 20, "age_loe": 40, "team_name": "teamB",
        })
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data] == ["member3", "member4"]
        assert set(data[0]) == {"member_id", "username", "age", "team_id", "team_name"}

    async def test_search_without_condition(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search")
        assert res.status_code == 200
        assert len(res.json()) == 4

    async def test_search_blank_username(self, client: AsyncClient, members):
        """빈 문자열 파라미터는 조건 없음으로 취급."""
        res = await client.get(f"{URL}/search", params={"username": ""})
        assert res.status_code == 200
        assert len(res.json()) == 4

    async def test_search_invalid_age(self, client: AsyncClient):
        res = await client.get(f"{URL}/search", params={"age_goe": "old"})
        assert res.status_code == 422


class TestMemberSearchPageApi:
    """페이지 검색 엔드포인트."""

    async def test_first_page(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"per_page": 2})
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["items"]] == ["member1", "member2"]
        assert data["total"] == 4
        assert data["offset"] == 0
        assert data["page_size"] == 2

    async def test_second_page(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"page": 2, "per_page": 3})
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["items"]] == ["member4"]
        assert data["offset"] == 3
        assert data["total"] == 4

    async def test_optimized_count_skips_count(self, client: AsyncClient, members):
        with patch.object(member_repository, "count", new=AsyncMock(return_value=999)) as count:
            res = await client.get(f"{URL}/search/page", params={"per_page": 10})
        assert res.status_code == 200
        count.assert_not_awaited()
        assert res.json()["total"] == 4

    async def test_unoptimized_count_always_runs(self, client: AsyncClient, members):
        with patch.object(member_repository, "count", new=AsyncMock(return_value=4)) as count:
            res = await client.get(f"{URL}/search/page", params={
                "per_page": 10, "optimized_count": "false",
            })
        assert res.status_code == 200
        count.assert_awaited_once()

    async def test_page_bounds(self, client: AsyncClient):
        assert (await client.get(f"{URL}/search/page", params={"page": 0})).status_code == 422
        assert (await client.get(f"{URL}/search/page", params={"per_page": 0})).status_code == 422
        assert (await client.get(f"{URL}/search/page", params={"per_page": 101})).status_code == 422


class TestMemberAggregationApi:
    """집계 엔드포인트."""

    async def test_statistics(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/statistics")
        assert res.status_code == 200
        assert res.json() == {
            "count": 4, "total": 100, "average": 25.0, "maximum": 40, "minimum": 10,
        }

    async def test_team_averages(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/team-averages")
        assert res.status_code == 200
        assert res.json() == [
            {"team_name": "teamA", "average_age": 15.0},
            {"team_name": "teamB", "average_age": 35.0},
        ]


class TestMemberCrudApi:
    """회원 생성/조회/삭제."""

    async def test_create_member(self, client: AsyncClient, teams):
        res = await client.post(URL, json={
            "username": "member1", "age": 10, "team_id": teams["teamA"].id,
        })
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "member1"
        assert data["team_id"] == teams["teamA"].id

        res2 = await client.get(f"{URL}/{data['id']}")
        assert res2.status_code == 200
        assert res2.json() == data

    async def test_create_member_without_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "solo", "age": 33})
        assert res.status_code == 201
        assert res.json()["team_id"] is None

    async def test_create_member_unknown_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "age": 1, "team_id": 9999})
        assert res.status_code == 404

    async def test_list_members_by_username(self, client: AsyncClient, members):
        res = await client.get(URL, params={"username": "member2"})
        assert res.status_code == 200
        assert [m["username"] for m in res.json()] == ["member2"]

    async def test_list_members(self, client: AsyncClient, members):
        res = await client.get(URL)
        assert res.status_code == 200
        assert len(res.json()) == 4

    async def test_get_nonexistent_member(self, client: AsyncClient):
        res = await client.get(f"{URL}/9999")
        assert res.status_code == 404
        assert res.json()["detail"] == "Member not found"

    async def test_delete_member(self, client: AsyncClient, members):
        res = await client.delete(f"{URL}/{members[0].id}")
        assert res.status_code == 200
        assert res.json()["message"] == "Member deleted"

        res2 = await client.get(f"{URL}/{members[0].id}")
        assert res2.status_code == 404

    async def test_delete_nonexistent_member(self, client: AsyncClient):
        res = await client.delete(f"{URL}/9999")
        assert res.status_code == 404
