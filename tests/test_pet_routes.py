from tests.conftest import auth


def test_owner_pet_scenario(client, owner_a, owner_b, staff, make_pet):
    pet = make_pet(owner_a[1], name='P1')
    assert client.get(f"/api/pets/{pet['id']}", headers=auth(owner_b[1])).status_code == 403
    response = client.get(f"/api/pets/{pet['id']}", headers=auth(staff[1]))
    assert response.status_code == 200
    assert response.get_json()['name'] == 'P1'


def test_owner_supplied_owner_id_is_ignored(client, owner_a, owner_b, make_pet):
    pet = make_pet(owner_a[1], owner_id=owner_b[0])
    assert pet['owner_id'] == owner_a[0]


def test_create_requires_name_and_species(client, owner_a):
    response = client.post('/api/pets', json={'name': 'Rex'}, headers=auth(owner_a[1]))
    assert response.status_code == 400


def test_staff_must_supply_owner_id(client, staff):
    response = client.post('/api/pets', json={'name': 'Rex', 'species': 'dog'}, headers=auth(staff[1]))
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Owner ID is required'


def test_staff_creates_pet_for_owner(client, owner_a, staff, make_pet):
    pet = make_pet(staff[1], owner_id=owner_a[0], breed='beagle')
    assert pet['owner_id'] == owner_a[0]
    assert pet['breed'] == 'beagle'
    listed = client.get('/api/pets', headers=auth(owner_a[1])).get_json()
    assert [p['id'] for p in listed] == [pet['id']]


def test_staff_cannot_create_pet_for_unknown_owner(client, staff):
    response = client.post('/api/pets', json={'name': 'Rex', 'species': 'dog', 'owner_id': 999},
                           headers=auth(staff[1]))
    assert response.status_code == 404


def test_list_is_scoped_by_role(client, owner_a, owner_b, staff, make_pet):
    mine = make_pet(owner_a[1], name='Mine')
    theirs = make_pet(owner_b[1], name='Theirs')
    owner_view = client.get('/api/pets', headers=auth(owner_a[1])).get_json()
    staff_view = client.get('/api/pets', headers=auth(staff[1])).get_json()
    assert [p['id'] for p in owner_view] == [mine['id']]
    assert [p['id'] for p in staff_view] == [mine['id'], theirs['id']]


def test_get_missing_pet(client, owner_a):
    assert client.get('/api/pets/999', headers=auth(owner_a[1])).status_code == 404


def test_update_pet(client, owner_a, make_pet):
    pet = make_pet(owner_a[1])
    response = client.put(f"/api/pets/{pet['id']}", json={'breed': 'lab', 'medical_history': 'vaccinated'},
                          headers=auth(owner_a[1]))
    assert response.status_code == 200
    updated = client.get(f"/api/pets/{pet['id']}", headers=auth(owner_a[1])).get_json()
    assert updated['breed'] == 'lab'
    assert updated['medical_history'] == 'vaccinated'
    assert updated['name'] == 'Rex'


def test_update_never_changes_owner(client, owner_a, owner_b, staff, make_pet):
    pet = make_pet(owner_a[1])
    client.put(f"/api/pets/{pet['id']}", json={'name': 'Max', 'owner_id': owner_b[0]}, headers=auth(staff[1]))
    updated = client.get(f"/api/pets/{pet['id']}", headers=auth(staff[1])).get_json()
    assert updated['name'] == 'Max'
    assert updated['owner_id'] == owner_a[0]


def test_update_rejects_empty_name(client, owner_a, make_pet):
    pet = make_pet(owner_a[1])
    response = client.put(f"/api/pets/{pet['id']}", json={'name': ''}, headers=auth(owner_a[1]))
    assert response.status_code == 400


def test_update_and_delete_other_owners_pet_forbidden(client, owner_a, owner_b, make_pet):
    pet = make_pet(owner_a[1])
    assert client.put(f"/api/pets/{pet['id']}", json={'name': 'Stolen'},
                      headers=auth(owner_b[1])).status_code == 403
    assert client.delete(f"/api/pets/{pet['id']}", headers=auth(owner_b[1])).status_code == 403


def test_staff_updates_and_deletes_any_pet(client, owner_a, staff, make_pet):
    pet = make_pet(owner_a[1])
    assert client.put(f"/api/pets/{pet['id']}", json={'name': 'Max'}, headers=auth(staff[1])).status_code == 200
    assert client.delete(f"/api/pets/{pet['id']}", headers=auth(staff[1])).status_code == 200
    assert client.get(f"/api/pets/{pet['id']}", headers=auth(staff[1])).status_code == 404


def test_update_and_delete_missing_pet(client, staff):
    assert client.put('/api/pets/999', json={'name': 'X'}, headers=auth(staff[1])).status_code == 404
    assert client.delete('/api/pets/999', headers=auth(staff[1])).status_code == 404


def test_delete_pet_cascades_to_appointments(client, owner_a, make_pet):
    pet = make_pet(owner_a[1])
    appointment = client.post('/api/appointments', json={'pet_id': pet['id'], 'date': '2030-01-01T10:00:00'},
                              headers=auth(owner_a[1])).get_json()
    assert client.delete(f"/api/pets/{pet['id']}", headers=auth(owner_a[1])).status_code == 200
    assert client.get(f"/api/appointments/{appointment['id']}", headers=auth(owner_a[1])).status_code == 404
    assert client.get('/api/appointments', headers=auth(owner_a[1])).get_json() == []
