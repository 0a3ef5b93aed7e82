import threading
from random import Random

import pytest

from coinvend.display import NoticeKind
from coinvend.domain.coins import CoinStore, Denomination
from coinvend.domain.exceptions import DuplicateLocation, EmptyMachine, InvalidLocation, InvalidPrice
from coinvend.domain.machine import CoinStatus, MachineState, VendingMachine, VendStatus
from coinvend.loaders import InMemoryStockLoader
from coinvend.testing import RecordingDisplay, machine_fixture, memory_machine, sample_loader  # noqa: F401


@pytest.fixture()
def machine():
    machine, _ = machine_fixture(CoinStore.of(5, 5, 1, 5))
    return machine


def test_construct_without_definitions_is_empty():
    with pytest.raises(EmptyMachine, match="empty"):
        VendingMachine(InMemoryStockLoader(), CoinStore())


def test_construct_with_zero_quantities_is_empty():
    loader = InMemoryStockLoader().add_item("A", 60, 0).add_item("B", 100, 0)
    with pytest.raises(EmptyMachine):
        VendingMachine(loader, CoinStore())


def test_construct_duplicate_location():
    loader = InMemoryStockLoader().add_item("A", 10, 5).add_item("A", 20, 3)
    with pytest.raises(DuplicateLocation, match="ultiple items"):
        VendingMachine(loader, CoinStore())


def test_construct_invalid_location():
    with pytest.raises(InvalidLocation, match="item location"):
        VendingMachine(InMemoryStockLoader().add_item("a", 10, 5), CoinStore())


def test_construct_invalid_price():
    with pytest.raises(InvalidPrice, match="invalid price"):
        VendingMachine(InMemoryStockLoader().add_item("A", 9, 5), CoinStore())


def test_machine_takes_custody_of_float():
    float_ = CoinStore.of(1, 0, 0, 0)
    machine = VendingMachine(sample_loader(), float_)
    assert machine.bank_value() == 100
    assert float_.is_empty()


def test_default_state_is_off():
    machine = VendingMachine(sample_loader(), CoinStore())
    assert not machine.is_running()
    assert machine.state is MachineState.OFF
    machine.turn_on()
    assert machine.is_running()
    machine.turn_off()
    assert not machine.is_running()


def test_insert_while_off_is_refused():
    machine, display = machine_fixture(running=False)
    outcome = machine.insert_coin(100)
    assert not outcome
    assert outcome.status is CoinStatus.MACHINE_NOT_RUNNING
    assert machine.user_balance_value() == 0
    assert display.last().kind is NoticeKind.NOT_RUNNING


def test_insert_rejects_foreign_coin():
    machine, display = machine_fixture(CoinStore.of(5, 5, 1, 5))
    assert machine.insert_coin(50)
    outcome = machine.insert_coin(7)
    assert outcome.status is CoinStatus.REJECTED
    assert not outcome.accepted
    assert machine.user_balance_value() == 50
    assert display.last().kind is NoticeKind.INVALID_COIN
    assert display.last().severity == "warning"
    assert "£0.50" in display.last().message


def test_insert_rejects_fractional_coin():
    machine, display = machine_fixture(CoinStore())
    outcome = machine.insert_coin(7.5)
    assert outcome.status is CoinStatus.REJECTED
    assert machine.user_balance_value() == 0
    assert display.kinds() == [NoticeKind.INVALID_COIN]


def test_insert_propagates_unrelated_errors(monkeypatch):
    machine, display = machine_fixture(CoinStore())

    def jammed(self, denomination):
        raise ValueError("coin mechanism jammed")

    monkeypatch.setattr(CoinStore, "add", jammed)
    with pytest.raises(ValueError, match="jammed"):
        machine.insert_coin(100)
    assert NoticeKind.INVALID_COIN not in display.kinds()


def test_vend_okay(machine):
    assert machine.insert_coin(100)
    outcome = machine.vend("A")
    assert outcome.status is VendStatus.SOLD
    assert outcome.change.total_value() == 40
    assert outcome.change.count_of(Denomination.TWENTY) == 1
    assert outcome.change.count_of(Denomination.TEN) == 2
    assert outcome.quantity_remaining == 1
    assert machine.user_balance_value() == 0
    assert machine.bank_value() == 820 + 100 - 40


def test_insufficient_funds_keeps_balance():
    machine, display = machine_fixture(CoinStore.of(5, 5, 5, 5))
    machine.insert_coin(100)
    outcome = machine.vend("C")
    assert not outcome
    assert outcome.status is VendStatus.INSUFFICIENT_FUNDS
    assert outcome.shortfall == 70
    assert display.last().kind is NoticeKind.INSUFFICIENT_FUNDS
    assert display.last().severity == "warning"

    assert machine.vend("A")


def test_insufficient_change_then_exact_payment():
    machine, display = machine_fixture(CoinStore())
    machine.insert_coin(100)
    before = machine.snapshot()

    outcome = machine.vend("A")
    assert outcome.status is VendStatus.INSUFFICIENT_CHANGE
    assert outcome.change is None
    assert machine.snapshot() == before
    assert display.last().kind is NoticeKind.INSUFFICIENT_CHANGE

    outcome = machine.vend("B")
    assert outcome.sold
    assert outcome.change.total_value() == 0
    assert machine.bank_value() == 100


def test_customer_coins_complete_the_change():
    # Bank alone has no 50p, but the customer's own 50p does the job.
    machine, _ = machine_fixture(CoinStore.of(1, 0, 0, 0))
    machine.insert_coin(50)
    machine.insert_coin(50)
    machine.insert_coin(50)
    outcome = machine.vend("B")
    assert outcome.sold
    assert outcome.change == CoinStore.of(0, 1, 0, 0)


def test_unknown_location_is_out_of_stock(machine):
    machine.insert_coin(100)
    before = machine.snapshot()
    assert machine.vend("D").status is VendStatus.OUT_OF_STOCK
    assert machine.vend("a").status is VendStatus.OUT_OF_STOCK
    assert machine.snapshot() == before


def test_item_sells_out_and_other_item_still_sells():
    machine, display = machine_fixture(CoinStore.of(100, 100, 100, 100))
    machine.insert_coin(100)
    assert machine.vend("A")
    machine.insert_coin(100)
    assert machine.vend("A")

    machine.insert_coin(100)
    outcome = machine.vend("A")
    assert outcome.status is VendStatus.OUT_OF_STOCK
    assert display.last().kind is NoticeKind.OUT_OF_STOCK
    assert machine.user_balance_value() == 100

    outcome = machine.vend("B")
    assert outcome.sold
    assert outcome.change.total_value() == 0


def test_machine_sells_out_and_switches_off():
    machine, display = machine_fixture(CoinStore.of(100, 100, 100, 100))
    for location in ("A", "A", "B", "B"):
        machine.insert_coin(100)
        assert machine.vend(location)

    machine.insert_coin(100)
    machine.insert_coin(100)
    assert machine.vend("C")
    assert machine.is_running()

    machine.insert_coin(100)
    machine.insert_coin(100)
    assert machine.vend("C")
    assert not machine.is_running()
    shutdown = display.last()
    assert shutdown.kind is NoticeKind.SHUTDOWN
    assert shutdown.severity == "warning"

    assert machine.insert_coin(100).status is CoinStatus.MACHINE_NOT_RUNNING
    assert machine.vend("A").status is VendStatus.MACHINE_NOT_RUNNING


def test_single_slot_sale_triggers_shutdown():
    machine, _ = machine_fixture(CoinStore(), loader=InMemoryStockLoader().add_item("A", 100, 1))
    machine.insert_coin(100)
    assert machine.vend("A")
    assert machine.state is MachineState.OFF
    assert not machine.insert_coin(100)


def test_coin_return_hands_back_coins():
    machine, display = machine_fixture(CoinStore())
    machine.insert_coin(100)
    machine.insert_coin(50)
    assert machine.user_balance_value() == 150

    returned = machine.coin_return()
    assert returned == CoinStore.of(1, 1, 0, 0)
    assert machine.user_balance_value() == 0
    assert machine.bank_value() == 0
    assert display.last().kind is NoticeKind.CANCELLED
    assert display.last().severity == "info"


def test_coin_return_works_while_off():
    machine, _ = machine_fixture(CoinStore())
    machine.insert_coin(20)
    machine.turn_off()
    assert machine.coin_return().total_value() == 20


def test_successful_sale_publishes_info():
    machine, display = machine_fixture(CoinStore.of(5, 5, 1, 5))
    machine.insert_coin(100)
    machine.vend("A")
    assert display.last().kind is NoticeKind.SOLD
    assert display.infos()
    assert not display.warnings()


def test_query_views_are_copies(machine):
    slot = machine.slot("A")
    slot.quantity_remaining = 0
    assert machine.slot("A").quantity_remaining == 2
    assert machine.slot("Q") is None
    assert machine.remaining_stock() == 6


def test_conservation_and_no_loss_over_random_sessions():
    rng = Random(1234)
    display = RecordingDisplay()
    machine = VendingMachine(sample_loader(), CoinStore.of(2, 1, 1, 1), display=display)
    machine.turn_on()
    initial = machine.bank_value()
    deposited = issued = returned = 0

    for _ in range(200):
        if not machine.is_running():
            break
        for _ in range(rng.randint(1, 3)):
            value = rng.choice([100, 50, 20, 10, 5])
            if machine.insert_coin(value):
                deposited += value
        before = machine.snapshot()
        outcome = machine.vend(rng.choice("ABCD"))
        if outcome.sold:
            issued += outcome.change.total_value()
        else:
            assert machine.snapshot() == before
            if rng.random() < 0.5:
                returned += machine.coin_return().total_value()
        held = machine.bank_value() + machine.user_balance_value() + issued + returned
        assert held == initial + deposited


def test_serialized_access_with_lock():
    lock = threading.Lock()
    machine = VendingMachine(sample_loader(), CoinStore.of(5, 5, 5, 5), lock=lock)
    machine.turn_on()
    machine.insert_coin(100)
    assert machine.vend("A")
    assert not lock.locked()


def test_memory_machine_fixture_is_running(memory_machine):
    assert memory_machine.is_running()
    assert memory_machine.insert_coin(50)
    assert memory_machine.vend("A").status is VendStatus.INSUFFICIENT_FUNDS
