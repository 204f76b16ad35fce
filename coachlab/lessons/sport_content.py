"""Sport-specific coaching content for offline lesson generation.

Maps sport aliases to display names and provides hand-authored warm-up,
setup, execution and error-correction content per sport. Text templates use
a {topic} placeholder and are filled in by the fallback generator.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SportContent:
    warmup: tuple[str, ...]
    setup: tuple[str, ...]
    initial_movement: str
    transition: str
    force_application: str
    follow_through: str
    common_mistakes: tuple[tuple[str, str], ...]


_SPORT_ALIASES: dict[str, str] = {
    "bjj": "Brazilian Jiu-Jitsu",
    "brazilian jiu-jitsu": "Brazilian Jiu-Jitsu",
    "brazilian jiu jitsu": "Brazilian Jiu-Jitsu",
    "jiu-jitsu": "Brazilian Jiu-Jitsu",
    "jiu jitsu": "Brazilian Jiu-Jitsu",
    "wrestling": "Wrestling",
    "boxing": "Boxing",
    "mma": "MMA",
    "mixed martial arts": "MMA",
    "baseball": "Baseball",
    "basketball": "Basketball",
    "football": "Football",
    "american football": "Football",
    "soccer": "Soccer",
    "softball": "Softball",
    "volleyball": "Volleyball",
}


def normalize_sport_name(sport: str) -> str:
    """Map a sport alias to its display name.

    Args:
        sport: Sport as entered (e.g., 'bjj', 'MMA', 'Soccer')

    Returns:
        Display name, or the input unchanged when the sport is not known
    """
    return _SPORT_ALIASES.get(sport.lower().strip(), sport)


_SPORT_CONTENT: dict[str, SportContent] = {
    "Brazilian Jiu-Jitsu": SportContent(
        warmup=(
            "Guard retention hip mobility: 2 rounds of 30 seconds of hip circles and leg pendulums",
            "Bridging and shrimping lines across the mat, 2 lengths each side",
            "Grip strength activation with gi or towel pulls, 3 sets of 15 seconds",
            "Core stability with hollow holds and technical stand-ups, 2 sets of 8 each side",
        ),
        setup=(
            "Establish positioning relative to your partner before committing to {topic}",
            "Check grip placement and pressure points on collar, sleeve, or underhook",
            "Verify foot positioning and weight distribution so the hips stay mobile",
            "Align the spine and frames so force travels through structure, not arm strength",
        ),
        initial_movement=(
            "Build a stable base, then secure the primary grips for {topic} at roughly 60-70% strength so "
            "the forearms do not fatigue. Frames go on bone rather than soft tissue and the head stays in line with the spine."
        ),
        transition=(
            "Feel where your partner's weight is committed. Heavy forward pressure opens sweeps and escapes, "
            "light posture opens attacks. Start {topic} the moment their weight shifts toward the side you are working."
        ),
        force_application=(
            "Apply controlled, progressive force using hips and legs rather than arms. Leverage for {topic} comes "
            "from angle and connection, so close space before driving."
        ),
        follow_through=(
            "Finish {topic} by consolidating the new position: re-establish grips, settle your weight, and be ready "
            "to chain into the next technique if your partner reacts."
        ),
        common_mistakes=(
            ("Pushing with straight arms instead of framing", "Keep elbows tight and frame with forearms on bone"),
            ("Moving the hips before creating space", "Frame first, then move the hips into the space created"),
            ("Flattening out on the back", "Stay on your side with the shoulder off the mat"),
        ),
    ),
    "Wrestling": SportContent(
        warmup=(
            "Stance and motion drill: 3 rounds of 30 seconds circling and level changes",
            "Penetration step repetitions, 2 sets of 10 each side",
            "Hand fighting with a partner at 50% intensity for 2 minutes",
            "Sprawl and recover intervals, 6 repetitions",
        ),
        setup=(
            "Win the hand fight and establish a control tie before attempting {topic}",
            "Check your base: feet staggered, hips under shoulders, head up",
            "Verify pressure and leverage points on the head, wrist, or elbow",
            "Keep your defensive awareness against the counter shot",
        ),
        initial_movement=(
            "From a staggered stance with weight on the balls of the feet, secure the control tie that sets up {topic}. "
            "Hands work inside position first; the feet stay active so the level change is available."
        ),
        transition=(
            "Read the pressure. When your opponent pushes in, use their momentum; when they pull away, follow with "
            "the feet. Launch {topic} on the reaction, not on the first touch."
        ),
        force_application=(
            "Drive through the hips with the head up and back straight. Power for {topic} comes from the legs and a "
            "tight connection, not from pulling with the arms."
        ),
        follow_through=(
            "Secure the position immediately after {topic}: chest pressure, hips low, and hands controlling the "
            "nearest limb so the opponent cannot scramble."
        ),
        common_mistakes=(
            ("Reaching with the arms before the feet move", "Change levels and step first, then connect the hands"),
            ("Head down during the shot", "Keep the head up and the spine neutral through the finish"),
            ("Stopping after the first attempt", "Chain a second attack off the opponent's defensive reaction"),
        ),
    ),
    "Boxing": SportContent(
        warmup=(
            "Shadow boxing combinations, 3 rounds of 1 minute at moderate pace",
            "Footwork ladder patterns: in-out, lateral, and pivot, 2 passes each",
            "Hand speed activation with fast jab-cross pairs, 3 sets of 20 seconds",
            "Head movement drill: slips and rolls under a rope, 2 rounds",
        ),
        setup=(
            "Set your stance with hands high and chin tucked before throwing {topic}",
            "Check foot positioning: lead foot toward the opponent, rear foot angled 45 degrees",
            "Verify range and distance so {topic} lands at full extension",
            "Keep the non-punching hand in guard position at all times",
        ),
        initial_movement=(
            "Stand with weight roughly 60-40 on the rear leg, elbows covering the ribs and hands protecting the chin. "
            "Start {topic} from this guard without any wind-up that telegraphs the punch."
        ),
        transition=(
            "Read the guard. A high guard exposes the body, a low guard exposes the head, a wide guard opens the "
            "centerline. Throw {topic} into the opening the opponent shows on their reset."
        ),
        force_application=(
            "Deliver power through hip rotation and a pivot on the ball of the foot. {topic} should snap out and "
            "return along the same line."
        ),
        follow_through=(
            "Return to guard immediately after {topic}, moving the head off the centerline and keeping ring "
            "position so the counter misses."
        ),
        common_mistakes=(
            ("Dropping the rear hand while punching", "Touch the rear glove to the cheek on every rep"),
            ("Loading up and telegraphing", "Punch straight from guard without pulling the hand back"),
            ("Standing square after the punch", "Pivot and step off the line as the hand returns"),
        ),
    ),
    "MMA": SportContent(
        warmup=(
            "Mixed-range movement: striking footwork into level change, 3 rounds of 45 seconds",
            "Stance switching drill, 2 sets of 10 switches",
            "Clinch position practice with a partner at 50% intensity for 2 minutes",
            "Ground transition movements: sprawl, shrimp, technical stand-up, 2 sets of 6",
        ),
        setup=(
            "Establish range and stance before committing to {topic}",
            "Check positioning across striking, clinch, and grappling ranges",
            "Verify base, balance, and defensive readiness against takedowns and strikes",
            "Plan the transition you want after {topic}",
        ),
        initial_movement=(
            "Keep a stance that can strike, defend takedowns, and change levels. Identify the current range "
            "(kicking, punching, clinch, or ground) before starting {topic}, because each range changes the entry."
        ),
        transition=(
            "Track the opponent's preferred range and push the exchange toward yours. Use feints to draw a reaction "
            "and start {topic} as they commit to a defense."
        ),
        force_application=(
            "Generate force from the hips and legs in every range. {topic} should keep you balanced enough to defend "
            "a counter from a different range."
        ),
        follow_through=(
            "Finish {topic} in a position that keeps options open: ready to strike, clinch, or control on the ground."
        ),
        common_mistakes=(
            ("Committing to one range only", "Mix levels so the opponent cannot read the entry"),
            ("Crossing the feet during entries", "Step and drag to keep the base under the hips"),
            ("Neglecting defense after the technique", "Return to stance or secure position immediately"),
        ),
    ),
    "Baseball": SportContent(
        warmup=(
            "Shoulder rotation and arm circles, 2 sets of 15 each direction",
            "Rotational core activation with medicine ball throws, 2 sets of 8 each side",
            "Throwing progression from 30 to 90 feet, 10 throws per distance",
            "Footwork and agility ladder, 3 passes",
        ),
        setup=(
            "Set your stance or fielding position before working on {topic}",
            "Check grip on bat or glove and hand positioning",
            "Verify foot positioning and weight distribution",
            "Lock eyes on the ball and settle your breathing",
        ),
        initial_movement=(
            "Set feet slightly wider than the shoulders with balanced weight. For {topic}, hold the bat or ball in the "
            "fingers rather than the palm, with relaxed grip pressure and a quiet upper body."
        ),
        transition=(
            "Recognize the pitch or play early: spin, arm slot, and speed decide the timing. Start {topic} once the "
            "read is made, not before."
        ),
        force_application=(
            "Drive from the back leg through the hips and torso so the arms finish the chain. {topic} depends on "
            "sequencing, not arm strength."
        ),
        follow_through=(
            "Follow through with full extension and rotation, holding balance at the finish of {topic}."
        ),
        common_mistakes=(
            ("Casting the hands away from the body", "Keep the hands inside the ball path"),
            ("Opening the front shoulder early", "Hold the shoulder closed until the hips fire"),
            ("Pulling the head off the ball", "Keep the eyes on the contact point through the finish"),
        ),
    ),
    "Basketball": SportContent(
        warmup=(
            "Dynamic stretching for legs and hips, 2 lengths of the court",
            "Jump activation: pogo hops and tuck jumps, 2 sets of 10",
            "Ball handling warm-up: stationary pound dribbles and crossovers, 2 minutes",
            "Defensive slides baseline to baseline, 2 passes",
        ),
        setup=(
            "Establish court position and spacing before starting {topic}",
            "Check ball security and hand placement",
            "Verify footwork and pivot foot",
            "Scan for defenders and teammates",
        ),
        initial_movement=(
            "Start from triple-threat: feet shoulder-width, knees bent, ball protected at the hip. For {topic}, lower "
            "the inside shoulder to protect the ball and create a driving angle."
        ),
        transition=(
            "Read the defender's balance. Weight on the heels invites the drive, weight on the toes invites the shot. "
            "Check help defense before committing to {topic}."
        ),
        force_application=(
            "Push off the inside edge of the foot and stay low through the first step. {topic} should be explosive "
            "without losing control of the ball."
        ),
        follow_through=(
            "Finish {topic} with a controlled landing and immediate transition to offense or defense."
        ),
        common_mistakes=(
            ("Traveling on the first step", "Establish the pivot foot before the drive"),
            ("Forcing the move into help defense", "Read the help and kick out when it comes"),
            ("Standing upright during the move", "Keep the hips low and the chest over the knees"),
        ),
    ),
    "Football": SportContent(
        warmup=(
            "Position-specific movement patterns, 3 sets of 20 yards",
            "Acceleration and deceleration drills, 6 repetitions",
            "Contact preparation with bag fits at 50% intensity, 8 reps",
            "Agility ladder work, 3 passes",
        ),
        setup=(
            "Establish alignment and spacing for the formation before {topic}",
            "Check body position and balance in your stance",
            "Read the defensive alignment pre-snap",
            "Confirm hand placement and footwork for the assignment",
        ),
        initial_movement=(
            "Set an athletic stance with weight on the balls of the feet and knees bent around 110-120 degrees. For "
            "{topic}, load the hips so the first step is explosive and the pad level stays low."
        ),
        transition=(
            "Read the defensive tells: line shade, linebacker flow, and safety depth. Commit to {topic} when the "
            "picture matches the read."
        ),
        force_application=(
            "Generate power from the ground up with short, choppy steps on contact. {topic} relies on leverage and "
            "pad level more than size."
        ),
        follow_through=(
            "Finish {topic} through the whistle, then reset into position for the next play."
        ),
        common_mistakes=(
            ("Poor initial stance", "Check a balanced two- or three-point stance every rep"),
            ("Rushing the snap count", "Time the movement with the cadence"),
            ("Losing field awareness", "Keep the eyes up and read the play as it develops"),
        ),
    ),
    "Soccer": SportContent(
        warmup=(
            "Dynamic leg swings and stretches, 2 sets of 10 each leg",
            "Footwork and ball control in a grid, 3 minutes",
            "Acceleration and change of direction, 6 repetitions",
            "Passing accuracy warm-up in pairs, 2 minutes",
        ),
        setup=(
            "Position yourself relative to the ball and space before {topic}",
            "Check body orientation and balance",
            "Verify foot positioning and weight distribution",
            "Scan the field for teammates and defenders",
        ),
        initial_movement=(
            "Approach the ball with controlled acceleration and plant the standing foot 6-8 inches beside it. For "
            "{topic}, align hips and shoulders with the target and keep a low center of gravity."
        ),
        transition=(
            "Read the defender's hips and feet. Turned hips or flat feet are the moment to start {topic}; a "
            "balanced defender calls for a feint first."
        ),
        force_application=(
            "Strike or touch the ball with a locked ankle and the correct surface of the foot. {topic} needs a "
            "clean contact point more than raw power."
        ),
        follow_through=(
            "Finish {topic} with body control and move straight into the next phase of play."
        ),
        common_mistakes=(
            ("Poor ball positioning", "Set the ball in front before executing"),
            ("Rushing the touch", "Slow the first touch to keep control"),
            ("Head down during the move", "Scan before and during the action"),
        ),
    ),
}

_GENERIC_CONTENT = SportContent(
    warmup=(
        "Sport-specific movement patterns at low intensity, 3 minutes",
        "Range of motion exercises for the major joints, 2 minutes",
        "Activation drills for the muscle groups used in {topic}, 2 sets of 10",
        "Balance and coordination work, 2 minutes",
    ),
    setup=(
        "Establish proper positioning for {topic}",
        "Check body alignment and balance",
        "Verify key contact points and placement",
        "Stay aware of surroundings and timing",
    ),
    initial_movement=(
        "Begin with proper positioning and setup for {topic}, making sure body mechanics, awareness, and mental "
        "preparation are aligned before the movement starts."
    ),
    transition=(
        "Identify the moment that allows {topic} by reading the opponent's positioning, movement patterns, and "
        "the situation in front of you."
    ),
    force_application=(
        "Execute {topic} using proper mechanics, moving force from the ground through the hips and trunk."
    ),
    follow_through=(
        "Complete {topic} with control and transition straight into the next action."
    ),
    common_mistakes=(
        ("Rushing the setup phase", "Take 2-3 seconds to establish proper positioning"),
        ("Using excessive force early", "Build pressure gradually through proper leverage"),
        ("Neglecting defensive awareness", "Keep peripheral vision and a defensive posture"),
    ),
)


def get_sport_content(sport: str) -> SportContent:
    """Get coaching content for a sport, falling back to generic content."""
    return _SPORT_CONTENT.get(normalize_sport_name(sport), _GENERIC_CONTENT)


def has_sport_content(sport: str) -> bool:
    return normalize_sport_name(sport) in _SPORT_CONTENT
