"""Tests for Klondike dealing, the stock cycle and move transitions."""

import pytest

from solitaire_engine.game.engine import apply_move, init
from solitaire_engine.game.rules import RejectionReason
from solitaire_engine.logging.formatters import parse_card, parse_cards
from solitaire_engine.models.card import KING, SUITS, Card
from solitaire_engine.models.deck import create_deck
from solitaire_engine.models.game_state import GamePhase, KlondikeState, TableauColumn, Variant
from solitaire_engine.models.moves import (
    DrawStock,
    FoundationToTableau,
    FreeCellToTableau,
    RecycleWaste,
    TableauToFoundation,
    TableauToFreeCell,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
)


def column(codes: str = "", face_up: int | None = None) -> TableauColumn:
    """Column from card codes; fully face-up unless ``face_up`` is given."""
    cards = parse_cards(codes)
    return TableauColumn(cards=cards, face_up_count=len(cards) if face_up is None else face_up)


def make_state(
    *columns: TableauColumn,
    stock: str = "",
    waste: str = "",
    foundations: tuple[str, ...] = ("", "", "", ""),
    draw_count: int = 1,
) -> KlondikeState:
    tableau = list(columns) + [TableauColumn()] * (7 - len(columns))
    return KlondikeState(
        tableau=tableau,
        stock=parse_cards(stock),
        waste=parse_cards(waste),
        foundations=[parse_cards(pile) for pile in foundations],
        draw_count=draw_count,
    )


class TestDeal:
    """Tests for dealing a Klondike game."""

    def test_layout(self):
        """Test column sizes, face-up tops and the stock."""
        state = init(42, Variant.KLONDIKE)

        assert [len(col.cards) for col in state.tableau] == [1, 2, 3, 4, 5, 6, 7]
        assert all(col.face_up_count == 1 for col in state.tableau)
        assert len(state.stock) == 24
        assert state.waste == ()
        assert state.draw_count == 1
        assert state.phase == GamePhase.DEALT

    def test_variant_by_name(self):
        """Test selecting the variant with its string value."""
        assert isinstance(init(1, "klondike"), KlondikeState)

    def test_draw_count(self):
        """Test the three-card draw option."""
        assert init(1, Variant.KLONDIKE, draw_count=3).draw_count == 3

    def test_conservation(self):
        """Test that the deal holds every card exactly once."""
        state = init(9, Variant.KLONDIKE)
        ids = sorted(card.id for card in state.all_cards())
        assert ids == sorted(card.id for card in create_deck())

    def test_deterministic(self):
        """Test that the same seed gives the same deal."""
        assert init(5, Variant.KLONDIKE) == init(5, Variant.KLONDIKE)


class TestStock:
    """Tests for drawing and recycling."""

    def test_draw_one(self):
        """Test that the stock top moves onto the waste."""
        state = init(5, Variant.KLONDIKE)
        top = state.stock[-1]
        result = apply_move(state, DrawStock())

        assert result.state.waste == (top,)
        assert len(result.state.stock) == 23
        assert result.state.moves == 1

    def test_draw_three_keeps_order(self):
        """Test that drawn cards keep their stock order."""
        state = make_state(stock="AS,2S,3S,4S,5S", draw_count=3)
        state = apply_move(state, DrawStock()).state

        assert state.waste == tuple(parse_cards("3S,4S,5S"))
        assert state.stock == tuple(parse_cards("AS,2S"))

    def test_draw_three_short_stock(self):
        """Test drawing when fewer cards remain than the draw count."""
        state = make_state(stock="AS,2S", waste="3S,4S,5S", draw_count=3)
        state = apply_move(state, DrawStock()).state

        assert state.waste == tuple(parse_cards("3S,4S,5S,AS,2S"))
        assert state.stock == ()

    def test_draw_empty_stock(self):
        """Test that drawing needs a card in the stock."""
        state = make_state(waste="3S")
        result = apply_move(state, DrawStock())
        assert result.rejection.reason == RejectionReason.STOCK_EMPTY

    def test_recycle_reverses_waste(self):
        """Test that recycling turns the waste over."""
        state = make_state(waste="AS,2S,3S")
        state = apply_move(state, RecycleWaste()).state

        assert state.stock == tuple(parse_cards("3S,2S,AS"))
        assert state.waste == ()
        assert state.moves == 1

        # The first card drawn is the one drawn first last time around
        state = apply_move(state, DrawStock()).state
        assert state.waste == tuple(parse_cards("AS"))

    def test_recycle_with_stock(self):
        """Test that the stock must be exhausted first."""
        state = make_state(stock="AS", waste="2S")
        result = apply_move(state, RecycleWaste())
        assert result.rejection.reason == RejectionReason.STOCK_NOT_EMPTY

    def test_recycle_nothing(self):
        """Test recycling with both piles empty."""
        result = apply_move(make_state(), RecycleWaste())
        assert result.rejection.reason == RejectionReason.SOURCE_EMPTY


class TestTableau:
    """Tests for tableau moves and face-down cards."""

    def test_move_flips_exposed_card(self):
        """Test that uncovering a face-down card turns it up."""
        state = make_state(column("KS,5H,9C", face_up=1), column("10H"))
        result = apply_move(state, TableauToTableau(source=0, target=1))

        source = result.state.tableau[0]
        assert source.cards == tuple(parse_cards("KS,5H"))
        assert source.face_up_count == 1
        assert source.face_up_cards == (parse_card("5H"),)
        assert result.state.tableau[1].face_up_count == 2

    def test_multi_card_move(self):
        """Test moving a face-up run."""
        state = make_state(column("5C,9S,8H,7S", face_up=3), column("10D"))
        result = apply_move(state, TableauToTableau(source=0, target=1, count=3))

        assert result.state.tableau[1].cards == tuple(parse_cards("10D,9S,8H,7S"))
        assert result.state.tableau[0].cards == tuple(parse_cards("5C"))
        assert result.state.tableau[0].face_up_count == 1

    def test_face_down_cards_cannot_move(self):
        """Test that a run may not include face-down cards."""
        state = make_state(column("9S,8H", face_up=1), column("10D"))
        result = apply_move(state, TableauToTableau(source=0, target=1, count=2))
        assert result.rejection.reason == RejectionReason.FACE_DOWN

    def test_invalid_sequence(self):
        """Test that a face-up run must be a valid sequence."""
        state = make_state(column("9S,8S"), column("10D"))
        result = apply_move(state, TableauToTableau(source=0, target=1, count=2))
        assert result.rejection.reason == RejectionReason.INVALID_SEQUENCE

    def test_no_capacity_limit(self):
        """Test that any valid run moves without free cells."""
        state = make_state(column("KH,QS,JH,10S,9H,8S"), column("KD"))
        result = apply_move(state, TableauToTableau(source=0, target=1, count=5))
        assert result.accepted

    def test_king_fills_empty_column(self):
        """Test that a King may move to an empty column."""
        state = make_state(column("5C,KH", face_up=1), column())
        result = apply_move(state, TableauToTableau(source=0, target=1))

        assert result.state.tableau[1].cards == (parse_card("KH"),)
        assert result.state.tableau[0].face_up_count == 1

    def test_only_king_fills_empty_column(self):
        """Test that other ranks may not."""
        state = make_state(column("QH"), column())
        result = apply_move(state, TableauToTableau(source=0, target=1))
        assert result.rejection.reason == RejectionReason.RANK_MISMATCH

    def test_build_on_face_down(self):
        """Test that a face-down top card cannot be built on."""
        state = make_state(column("9S"), column("10D", face_up=0))
        result = apply_move(state, TableauToTableau(source=0, target=1))
        assert result.rejection.reason == RejectionReason.FACE_DOWN

    def test_color_mismatch(self):
        """Test the alternating color rule."""
        state = make_state(column("9H"), column("10D"))
        result = apply_move(state, TableauToTableau(source=0, target=1))
        assert result.rejection.reason == RejectionReason.COLOR_MISMATCH


class TestWasteAndFoundation:
    """Tests for waste and foundation moves."""

    def test_waste_to_tableau(self):
        """Test playing the waste top onto a column."""
        state = make_state(column("10D"), waste="AS,9C")
        result = apply_move(state, WasteToTableau(column=0))

        assert result.state.tableau[0].cards == tuple(parse_cards("10D,9C"))
        assert result.state.waste == tuple(parse_cards("AS"))

    def test_waste_king_to_empty_column(self):
        """Test a King from the waste filling an empty column."""
        state = make_state(column(), waste="KH")
        result = apply_move(state, WasteToTableau(column=0))
        assert result.state.tableau[0].face_up_count == 1

    def test_empty_waste(self):
        """Test moving from an empty waste."""
        result = apply_move(make_state(column("10D")), WasteToTableau(column=0))
        assert result.rejection.reason == RejectionReason.SOURCE_EMPTY

    def test_waste_to_foundation(self):
        """Test starting a foundation from the waste."""
        state = make_state(waste="AS")
        result = apply_move(state, WasteToFoundation(foundation=0))
        assert result.state.foundations[0] == (parse_card("AS"),)

    def test_tableau_to_foundation_flips(self):
        """Test that playing a top card to a foundation exposes the next card."""
        state = make_state(column("7C,2H", face_up=1), foundations=("", "AH", "", ""))
        result = apply_move(state, TableauToFoundation(column=0, foundation=1))

        assert result.state.foundations[1] == tuple(parse_cards("AH,2H"))
        assert result.state.tableau[0].face_up_count == 1

    def test_face_down_to_foundation(self):
        """Test that a face-down card cannot be played."""
        state = make_state(column("AH", face_up=0))
        result = apply_move(state, TableauToFoundation(column=0, foundation=0))
        assert result.rejection.reason == RejectionReason.FACE_DOWN

    def test_foundation_to_tableau(self):
        """Test taking a card back from a foundation."""
        state = make_state(column("4H"), foundations=("AS,2S,3S", "", "", ""))
        result = apply_move(state, FoundationToTableau(foundation=0, column=0))
        assert result.state.tableau[0].cards == tuple(parse_cards("4H,3S"))

    @pytest.mark.parametrize(
        "move",
        [TableauToFreeCell(column=0, cell=0), FreeCellToTableau(cell=0, column=0)],
    )
    def test_free_cell_moves_rejected(self, move):
        """Test that Klondike has no free cells."""
        result = apply_move(make_state(column("4H")), move)
        assert result.rejection.reason == RejectionReason.UNSUPPORTED_MOVE


class TestWin:
    """Tests for finishing a game."""

    @pytest.fixture
    def nearly_won(self):
        """Every suit built to the Queen with the Kings on the tableau."""
        foundations = [
            [Card(suit=suit, rank=rank) for rank in range(1, KING)] for suit in SUITS
        ]
        columns = [
            TableauColumn(cards=(Card(suit=suit, rank=KING),), face_up_count=1) for suit in SUITS
        ]
        return KlondikeState(
            tableau=columns + [TableauColumn()] * 3,
            foundations=foundations,
        )

    def test_win(self, nearly_won):
        """Test that completing every foundation wins."""
        state = nearly_won
        for i in range(4):
            assert not state.is_won
            state = apply_move(state, TableauToFoundation(column=i, foundation=i)).state

        assert state.is_won
        assert state.phase == GamePhase.WON
        assert state.moves == 4

    def test_won_game_rejects_moves(self, nearly_won):
        """Test that nothing can be played after a win."""
        state = nearly_won
        for i in range(4):
            state = apply_move(state, TableauToFoundation(column=i, foundation=i)).state

        result = apply_move(state, FoundationToTableau(foundation=0, column=5))
        assert result.rejection.reason == RejectionReason.GAME_OVER
