from datuum.utils.ids import stable_hash, short_id

def test_stable_hash_deterministic_and_json_order_insensitive():
    assert stable_hash({"b": 1, "a": 2}) == stable_hash({"a": 2, "b": 1})

def test_stable_hash_uses_to_dict():
    class Obj:
        def to_dict(self):
            return {"x": 1}
    assert stable_hash(Obj()) == stable_hash({"x": 1})

def test_short_id_length_and_difference():
    sx, sy = short_id({"x": 1}, 8), short_id({"x": 2}, 8)
    assert len(sx) == len(sy) == 8
    assert sx != sy
