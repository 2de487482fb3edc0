from rsdkit.input import InputData
from rsdkit.player import ControlMode, Player, PlayerControl


def test_normal_mode_copies_directions():
    control = PlayerControl()
    player = Player()
    control.process(player, InputData(up=True, left=True), InputData())
    assert player.up is True
    assert player.left is True
    assert player.right is False
    assert player.down is False


def test_left_and_right_together_cancel():
    control = PlayerControl()
    player = Player(left=True, right=True)
    control.process(player, InputData(left=True, right=True), InputData())
    assert (player.left, player.right) == (False, False)


def test_jump_from_any_face_button():
    control = PlayerControl()
    for held in ("A", "B", "C"):
        player = Player()
        control.process(player, InputData(**{held: True}), InputData(**{held: True}))
        assert player.jump_hold is True
        assert player.jump_press is True


def test_jump_press_uses_press_state():
    control = PlayerControl()
    player = Player()
    control.process(player, InputData(A=True), InputData())
    assert player.jump_hold is True
    assert player.jump_press is False


def _drive(control, frames_after):
    leader = Player()
    control.process(leader, InputData(up=True), InputData())
    for _ in range(frames_after):
        control.process(leader, InputData(), InputData())


def test_sidekick_sees_input_sixteen_frames_later():
    control = PlayerControl()
    _drive(control, 15)
    sidekick = Player(control_mode=ControlMode.SIDEKICK)
    control.process(sidekick, InputData(), InputData())
    assert sidekick.up is True
    assert sidekick.down is False


def test_sidekick_not_yet_reached():
    control = PlayerControl()
    _drive(control, 14)
    sidekick = Player(control_mode=ControlMode.SIDEKICK)
    control.process(sidekick, InputData(up=True), InputData())
    assert sidekick.up is False


def test_buffer_drops_old_input():
    control = PlayerControl()
    _drive(control, 16)
    assert control.buffers["up"] == 0
    sidekick = Player(control_mode=ControlMode.SIDEKICK, up=True)
    control.process(sidekick, InputData(), InputData())
    assert sidekick.up is False


def test_none_mode_records_own_flags_and_ignores_keys():
    control = PlayerControl()
    player = Player(control_mode=ControlMode.NONE, jump_hold=True)
    control.process(player, InputData(up=True), InputData())
    assert player.up is False
    assert control.buffers["jump_hold"] == 1
    assert control.buffers["up"] == 0


def test_sidekick_does_not_touch_buffers():
    control = PlayerControl()
    _drive(control, 3)
    before = dict(control.buffers)
    control.process(Player(control_mode=ControlMode.SIDEKICK), InputData(), InputData())
    assert control.buffers == before