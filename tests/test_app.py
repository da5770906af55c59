def start_run(client, **body):
    res = client.post("/api/run", json=body)
    assert res.status_code == 200
    return res.get_json()


def test_index_renders(client):
    res = client.get("/")

    assert res.status_code == 200
    html = res.get_data(as_text=True)
    assert "Sorting Algorithm Visualizer" in html
    assert 'id="algo-selector"' in html
    assert "<svg" in html


def test_state_defaults(client):
    state = client.get("/api/state").get_json()

    assert state["selected_algo"] == "bubble"
    assert state["view"] == "circle"
    assert len(state["values"]) == 10
    assert state["is_sorting"] is False


def test_generate_array(client):
    data = client.post("/api/array/generate", json={"size": 12, "seed": 3}).get_json()

    assert len(data["values"]) == 12
    assert client.get("/api/state").get_json()["values"] == data["values"]


def test_generate_rejects_non_integer_size(client):
    res = client.post("/api/array/generate", json={"size": "many"})

    assert res.status_code == 400


def test_import_array(client):
    data = client.post("/api/array/import", json={"text": "5, 3, 8, 1, 9"}).get_json()

    assert data["values"] == [5, 3, 8, 1, 9]


def test_import_rejects_bad_input(client):
    res = client.post("/api/array/import", json={"text": "5, three, 8"})

    assert res.status_code == 400
    assert "Not an integer" in res.get_json()["error"]


def test_run_returns_first_frame(client):
    client.post("/api/array/import", json={"text": "5 3 8 1 9"})

    data = start_run(client, play=False)

    assert data["current_frame"] == 0
    assert data["total_frames"] > 1
    assert data["frame"]["array"] == [5, 3, 8, 1, 9]
    assert data["is_playing"] is False
    assert "Analytics" in data["analytics"]


def test_second_run_refused_while_playing(client):
    start_run(client)

    res = client.post("/api/run", json={})
    assert res.status_code == 409
    assert client.post("/api/array/generate", json={}).status_code == 409
    assert client.post("/api/config/algo", json={"algo_key": "merge"}).status_code == 409

    assert client.post("/api/run", json={"force": True}).status_code == 200


def test_new_run_allowed_after_pause(client):
    start_run(client)

    assert client.post("/api/step/play").get_json()["is_playing"] is False
    assert client.post("/api/run", json={}).status_code == 200


def test_step_navigation(client):
    client.post("/api/array/import", json={"text": "5 4 3 2 1"})
    total = start_run(client, play=False)["total_frames"]

    assert client.post("/api/step/prev").status_code == 400
    assert client.post("/api/step/next").get_json()["current_frame"] == 1
    assert client.post("/api/step/prev").get_json()["current_frame"] == 0

    assert client.post("/api/step/goto", json={"index": total}).status_code == 400
    assert client.post("/api/step/goto", json={"index": -1}).status_code == 400

    last = client.post("/api/step/goto", json={"index": total - 1}).get_json()
    assert last["done"] is True
    assert last["frame"]["array"] == [1, 2, 3, 4, 5]
    assert client.post("/api/step/next").status_code == 400


def test_playing_stops_on_last_frame(client):
    total = start_run(client)["total_frames"]

    data = client.post("/api/step/goto", json={"index": total - 1}).get_json()

    assert data["is_playing"] is False
    assert client.get("/api/state").get_json()["is_sorting"] is False


def test_step_without_run(client):
    assert client.post("/api/step/next").status_code == 400
    assert client.post("/api/step/play").get_json()["is_playing"] is False


def test_select_algorithm_accepts_aliases(client):
    data = client.post("/api/config/algo", json={"algo_key": "merge sort"}).get_json()
    assert data["algo_key"] == "merge"

    data = client.post("/api/config/algo", json={"algo_key": "quick"}).get_json()
    assert data["algo_key"] == "bubble"


def test_run_uses_selected_algorithm(client):
    client.post("/api/array/import", json={"text": "2 1 4 3 5"})
    client.post("/api/config/algo", json={"algo_key": "merge"})

    data = start_run(client, play=False)

    assert "Merge Sort" in data["analytics"]


def test_view_and_speed(client):
    data = client.post("/api/config/view", json={"view": "bar"}).get_json()
    assert 'class="bar' in data["svg"]
    assert client.post("/api/config/view", json={"view": "pie"}).status_code == 400

    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json()["speed"] == "fast"
    assert client.post("/api/config/speed", json={"speed": "ludicrous"}).status_code == 400


def test_speed_scales_frame_delay(client):
    client.post("/api/array/import", json={"text": "2 1 3 4 5"})
    client.post("/api/config/speed", json={"speed": "slow"})

    data = start_run(client, play=False)

    assert data["delay"] == data["frame"]["delay"] * 2.0


def test_size_bounds(client):
    assert len(client.post("/api/config/size", json={"size": 20}).get_json()["values"]) == 20
    assert client.post("/api/config/size", json={"size": 4}).status_code == 400
    assert client.post("/api/config/size", json={"size": 31}).status_code == 400


def test_learning_mode(client):
    client.post("/api/config/learning", json={"enabled": False})
    client.post("/api/array/import", json={"text": "2 1 3 4 5"})

    data = start_run(client, play=False)

    assert "Learning mode disabled" in data["explanation"]


def test_compare(client):
    client.post("/api/array/import", json={"text": "1 2 3 4 5 6"})

    data = client.post("/api/compare", json={"left": "insertion", "right": "selection"}).get_json()

    assert data["winner_comparisons"] == "Insertion Sort"
    assert "Insertion Sort vs Selection Sort" in data["comparison"]


def test_compare_rejects_unknown_algorithm(client):
    res = client.post("/api/compare", json={"left": "bubble", "right": "bogo"})

    assert res.status_code == 400


def test_stored_runs_are_capped(client):
    import main
    from config import Config

    Config.max_stored_runs = 3
    sessions = [main.app.test_client() for _ in range(5)]
    for c in sessions:
        assert c.post("/api/run", json={"play": False}).status_code == 200

    assert len(main.RUNS) == 3
    # the oldest sessions lost their runs, the newest still navigate
    assert sessions[0].post("/api/step/next").status_code == 400
    assert sessions[-1].post("/api/step/next").status_code == 200


def test_recently_used_run_survives_eviction(client):
    import main
    from config import Config

    Config.max_stored_runs = 2
    first, second, third = (main.app.test_client() for _ in range(3))
    first.post("/api/run", json={"play": False})
    second.post("/api/run", json={"play": False})

    assert first.post("/api/step/next").status_code == 200
    third.post("/api/run", json={"play": False})

    assert len(main.RUNS) == 2
    assert first.post("/api/step/prev").status_code == 200
    assert second.post("/api/step/next").status_code == 400


def test_rerun_replaces_the_session_run(client):
    import main

    start_run(client, play=False)
    start_run(client, play=False)

    assert len(main.RUNS) == 1
