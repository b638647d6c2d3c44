from reforged import Value, of


def test_of_value() -> None:
    opt = of(5)
    assert opt == Value(5)
    assert opt.or_else(0) == 5


if __name__ == "__main__":
    test_of_value()
    print("Basic test passed!")
