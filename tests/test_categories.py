from conftest import create_category, create_post, random_id


async def test_list_active_categories_with_post_counts(client, admin_headers, author_headers):
    web = await create_category(client, admin_headers, "Web Development")
    await create_category(client, admin_headers, "Databases", description="Storage", color="#8B5CF6")
    await create_category(client, admin_headers, "Archived", isActive=False)
    await create_post(client, author_headers, web["id"], "One")
    await create_post(client, author_headers, web["id"], "Two")

    response = await client.get("/api/categories")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [c["name"] for c in data] == ["Databases", "Web Development"]
    assert [c["postCount"] for c in data] == [0, 2]
    assert data[0]["description"] == "Storage"
    assert data[0]["color"] == "#8B5CF6"


async def test_create_category_defaults(client, admin_headers):
    category = await create_category(client, admin_headers, "  Web Development  ")

    assert category["name"] == "Web Development"
    assert category["slug"] == "web-development"
    assert category["color"] == "#3B82F6"
    assert category["description"] == ""
    assert category["isActive"] is True
    assert category["postCount"] == 0


async def test_get_category_by_slug_or_id(client, admin_headers):
    category = await create_category(client, admin_headers, "Web Development")

    by_slug = await client.get("/api/categories/web-development")
    by_id = await client.get(f"/api/categories/{category['id']}")

    assert by_slug.status_code == 200
    assert by_slug.json() == by_id.json()


async def test_inactive_category_is_hidden(client, admin_headers):
    category = await create_category(client, admin_headers, "Hidden", isActive=False)

    response = await client.get(f"/api/categories/{category['id']}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Category not found"}


async def test_get_missing_category(client):
    response = await client.get("/api/categories/nothing-here")

    assert response.status_code == 404


async def test_create_category_requires_admin(client, author_headers):
    response = await client.post("/api/categories", json={"name": "Tech"}, headers=author_headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "error": "User role user is not authorized to access this route",
    }


async def test_create_category_requires_authentication(client):
    response = await client.post("/api/categories", json={"name": "Tech"})

    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized to access this route"


async def test_create_category_validation(client, admin_headers):
    response = await client.post(
        "/api/categories",
        json={"name": "", "description": "x" * 201, "color": "blue"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"name", "description", "color"}


async def test_duplicate_category_name(client, admin_headers):
    await create_category(client, admin_headers, "Tech")

    response = await client.post("/api/categories", json={"name": "Tech"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "A category with this name already exists"


async def test_update_category(client, admin_headers):
    category = await create_category(client, admin_headers, "Tech")

    response = await client.put(
        f"/api/categories/{category['id']}",
        json={"name": "Technology", "color": "#10B981"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["name"] == "Technology"
    assert updated["slug"] == "technology"
    assert updated["color"] == "#10B981"
    assert (await client.get("/api/categories/technology")).status_code == 200


async def test_update_category_to_existing_name(client, admin_headers):
    await create_category(client, admin_headers, "Tech")
    other = await create_category(client, admin_headers, "Science")

    response = await client.put(f"/api/categories/{other['id']}", json={"name": "Tech"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "A category with this name already exists"


async def test_update_missing_category(client, admin_headers):
    for category_id in (random_id(), "tech"):
        response = await client.put(f"/api/categories/{category_id}", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404


async def test_update_category_requires_admin(client, admin_headers, author_headers):
    category = await create_category(client, admin_headers, "Tech")

    response = await client.put(f"/api/categories/{category['id']}", json={"name": "Mine"}, headers=author_headers)

    assert response.status_code == 403


async def test_delete_category_with_posts_is_blocked(client, admin_headers, author_headers, category):
    post = await create_post(client, author_headers, category["id"], "Anchored")

    response = await client.delete(f"/api/categories/{category['id']}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot delete category with existing posts"
    assert (await client.get(f"/api/categories/{category['id']}")).status_code == 200
    assert (await client.get(f"/api/posts/{post['id']}")).status_code == 200


async def test_delete_empty_category(client, admin_headers, category):
    response = await client.delete(f"/api/categories/{category['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}
    assert (await client.get(f"/api/categories/{category['id']}")).status_code == 404


async def test_delete_missing_category(client, admin_headers):
    response = await client.delete(f"/api/categories/{random_id()}", headers=admin_headers)

    assert response.status_code == 404
