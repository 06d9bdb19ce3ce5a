import pytest


@pytest.mark.integration
def test_create_user_and_get_me(client, make_auth_headers):
    response = client.post(
        "/api/users", json={"name": "Cleo", "email": "cleo@example.com"}
    )

    assert response.status_code == 201
    created = response.json()
    assert created["wishlist"] == []

    response = client.get("/api/users/me", headers=make_auth_headers(created["id"]))
    assert response.status_code == 200
    assert response.json()["email"] == "cleo@example.com"

    response = client.get(f"/api/users/{created['id']}")
    assert response.json()["name"] == "Cleo"


@pytest.mark.integration
def test_create_user_duplicate_email(client, user):
    response = client.post("/api/users", json={"name": "Ada", "email": user.email})
    assert response.status_code == 409


@pytest.mark.integration
def test_create_user_invalid_email(client):
    response = client.post("/api/users", json={"name": "Ada", "email": "not-an-email"})
    assert response.status_code == 422


@pytest.mark.integration
def test_booking_flow(client, user, auth_headers, create_sample_listings):
    response = client.post(
        "/api/bookings",
        json={
            "propertyId": "p1",
            "checkIn": "2025-07-01",
            "checkOut": "2025-07-04",
            "guests": 2,
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "pending"
    assert booking["totalPrice"] == 150
    assert booking["userId"] == user.id

    assert client.get("/api/bookings/check/p1").json() == {"isConfirmed": False}

    response = client.patch(
        f"/api/bookings/{booking['id']}",
        json={"status": "confirmed"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"

    assert client.get("/api/bookings/check/p1").json() == {"isConfirmed": True}

    mine = client.get("/api/bookings", headers=auth_headers).json()
    assert [b["id"] for b in mine] == [booking["id"]]


@pytest.mark.integration
def test_booking_validation(client, user, auth_headers, create_sample_listings):
    response = client.post(
        "/api/bookings",
        json={"propertyId": "p1", "checkIn": "2025-07-04", "checkOut": "2025-07-01"},
        headers=auth_headers,
    )
    assert response.status_code == 422

    response = client.post(
        "/api/bookings",
        json={"propertyId": "nope", "checkIn": "2025-07-01", "checkOut": "2025-07-02"},
        headers=auth_headers,
    )
    assert response.status_code == 404

    response = client.post(
        "/api/bookings",
        json={"propertyId": "p1", "checkIn": "2025-07-01", "checkOut": "2025-07-02"},
    )
    assert response.status_code == 401


@pytest.mark.integration
def test_booking_update_by_other_user_is_forbidden(
    client, user, other_user, auth_headers, make_auth_headers, create_sample_listings
):
    booking = client.post(
        "/api/bookings",
        json={"propertyId": "p2", "checkIn": "2025-08-01", "checkOut": "2025-08-02"},
        headers=auth_headers,
    ).json()

    response = client.patch(
        f"/api/bookings/{booking['id']}",
        json={"status": "cancelled"},
        headers=make_auth_headers(other_user.id),
    )
    assert response.status_code == 403


@pytest.mark.integration
def test_reviews_update_average_rating(
    client, user, other_user, auth_headers, make_auth_headers, create_sample_listings
):
    response = client.post(
        "/api/reviews",
        json={"propertyId": "p3", "rating": 5, "comment": "Lovely lake views"},
        headers=auth_headers,
    )
    assert response.status_code == 201

    client.post(
        "/api/reviews",
        json={"propertyId": "p3", "rating": 4},
        headers=make_auth_headers(other_user.id),
    )

    assert client.get("/api/properties/p3").json()["averageRating"] == 4.5
    reviews = client.get("/api/reviews/property/p3").json()
    assert sorted(r["rating"] for r in reviews) == [4, 5]

    response = client.post(
        "/api/reviews", json={"propertyId": "p3", "rating": 6}, headers=auth_headers
    )
    assert response.status_code == 422


@pytest.mark.integration
def test_messages(client, user, other_user, auth_headers, make_auth_headers, create_sample_listings):
    response = client.post(
        "/api/messages",
        json={"recipientId": other_user.id, "propertyId": "p2", "content": "Is it free in May?"},
        headers=auth_headers,
    )
    assert response.status_code == 201

    inbox = client.get("/api/messages", headers=make_auth_headers(other_user.id)).json()
    assert len(inbox) == 1
    assert inbox[0]["senderId"] == user.id
    assert inbox[0]["content"] == "Is it free in May?"

    response = client.post(
        "/api/messages",
        json={"recipientId": "nobody", "content": "Hello?"},
        headers=auth_headers,
    )
    assert response.status_code == 404
