from main import run_demo


def test_run_demo_leaves_only_ada(repo):
    run_demo(repo)
    remaining = repo.find_all().unwrap()
    assert [s.id for s in remaining] == [1]
