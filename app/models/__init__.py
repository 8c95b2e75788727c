from .user import User, UserRole
from .team import Team, TeamMember, TeamMemberRole
from .team_invitation import TeamInvitation, InvitationStatus, InvitedRole
